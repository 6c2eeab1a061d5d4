"""配置加载测试"""

from __future__ import annotations

import pytest

import tfscm.core.config as cfgmod
from tfscm.core.config import DEFAULT_WORKSPACE_NAME, Config, get_config, init_config
from tfscm.core.exceptions import ConfigError


class TestConfig:

    def test_defaults(self):
        cfg = Config()
        assert cfg.tf_executable == "tf"
        assert cfg.force_get is False
        assert cfg.skip_history_date_check is False
        assert cfg.default_workspace_name == DEFAULT_WORKSPACE_NAME
        assert "%Y-%m-%d" in cfg.history_date_formats

    def test_missing_file_gives_defaults(self, tmp_path):
        cfg = Config.from_file(str(tmp_path / "nope.yml"))
        assert cfg == Config()

    def test_from_file_with_extra(self, tmp_path):
        path = tmp_path / "cfg.yml"
        path.write_text(
            "tf_executable: /opt/tee/tf\n"
            "force_get: true\n"
            "history_date_formats:\n"
            "  - '%d/%m/%Y %H:%M'\n"
            "team: infra\n",
            encoding="utf-8",
        )
        cfg = Config.from_file(str(path))
        assert cfg.tf_executable == "/opt/tee/tf"
        assert cfg.force_get is True
        assert cfg.history_date_formats == ["%d/%m/%Y %H:%M"]
        assert cfg.extra == {"team": "infra"}

    def test_wrong_type_rejected(self, tmp_path):
        path = tmp_path / "cfg.yml"
        path.write_text("force_get: 'yes please'\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="force_get"):
            Config.from_file(str(path))

    def test_date_formats_must_be_strings(self, tmp_path):
        path = tmp_path / "cfg.yml"
        path.write_text("history_date_formats: [1, 2]\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="history_date_formats"):
            Config.from_file(str(path))

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "cfg.yml"
        path.write_text("tf_executable: [\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.from_file(str(path))

    def test_to_dict(self):
        assert Config().to_dict()["tf_executable"] == "tf"


class TestGlobalConfig:

    def test_init_replaces_current(self, tmp_path):
        path = tmp_path / "cfg.yml"
        path.write_text("tf_executable: tf.cmd\n", encoding="utf-8")
        cfg = init_config(str(path))
        assert get_config() is cfg
        assert cfgmod.get_config().tf_executable == "tf.cmd"
