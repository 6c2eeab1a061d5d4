"""YAML 读写测试"""

from __future__ import annotations

import pytest

from tfscm.core.exceptions import ConfigError
from tfscm.utils import yaml_io
from tfscm.utils.yaml_io import read_yaml_mapping, write_yaml_mapping


class TestReadYamlMapping:

    def test_missing_file(self, tmp_path):
        assert read_yaml_mapping(tmp_path / "none.yml") == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert read_yaml_mapping(path) == {}

    def test_syntax_error(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("a: [1, 2\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="格式错误"):
            read_yaml_mapping(path)

    def test_top_level_list(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="字典"):
            read_yaml_mapping(path)

    def test_too_large(self, tmp_path, monkeypatch):
        monkeypatch.setattr(yaml_io, "MAX_YAML_BYTES", 4)
        path = tmp_path / "big.yml"
        path.write_text("key: value\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="过大"):
            read_yaml_mapping(path)


class TestWriteYamlMapping:

    def test_creates_parent_and_keeps_order(self, tmp_path):
        path = tmp_path / "sub" / "out.yml"
        write_yaml_mapping(path, {"b": 1, "a": "工作空间"})
        text = path.read_text(encoding="utf-8")
        assert text.index("b:") < text.index("a:")
        assert "工作空间" in text
        assert read_yaml_mapping(path) == {"b": 1, "a": "工作空间"}

    def test_no_temp_files_left(self, tmp_path):
        path = tmp_path / "out.yml"
        write_yaml_mapping(path, {"a": 1})
        write_yaml_mapping(path, {"a": 2})
        assert [p.name for p in tmp_path.iterdir()] == ["out.yml"]

    def test_iso_timestamp_string_preserved(self, tmp_path):
        path = tmp_path / "out.yml"
        write_yaml_mapping(path, {"last_build": "2008-06-27T13:00:00+00:00"})
        assert read_yaml_mapping(path)["last_build"] == "2008-06-27T13:00:00+00:00"
