"""工作空间名宏展开测试"""

from __future__ import annotations

from unittest.mock import patch

from tfscm.core.variables import build_variables, resolve_workspace_name


class TestResolveWorkspaceName:

    ENV = {"NODE_NAME": "build01", "USER_NAME": "ci", "BRANCH": "main"}

    def test_job_name(self):
        assert resolve_workspace_name("Hudson-${JOB_NAME}", "nightly", self.ENV) == "Hudson-nightly"

    def test_node_and_user(self):
        name = resolve_workspace_name("${JOB_NAME}-${NODE_NAME}-${USER_NAME}", "j", self.ENV)
        assert name == "j-build01-ci"

    def test_environment_variable(self):
        assert resolve_workspace_name("ws-$BRANCH", "j", self.ENV) == "ws-main"

    def test_unknown_macro_kept(self):
        assert resolve_workspace_name("ws-${NOPE}", "j", self.ENV) == "ws-${NOPE}"

    def test_job_name_overrides_environment(self):
        env = {**self.ENV, "JOB_NAME": "from-env"}
        assert resolve_workspace_name("${JOB_NAME}", "real", env) == "real"


class TestBuildVariables:

    def test_defaults_filled(self):
        with patch("tfscm.core.variables.socket.gethostname", return_value="host1"), \
             patch("tfscm.core.variables.getpass.getuser", return_value="bob"):
            variables = build_variables("j", {})
        assert variables["NODE_NAME"] == "host1"
        assert variables["USER_NAME"] == "bob"

    def test_unknown_user_tolerated(self):
        with patch("tfscm.core.variables.getpass.getuser", side_effect=KeyError("uid")):
            variables = build_variables("j", {"NODE_NAME": "n"})
        assert "USER_NAME" not in variables
        assert variables["JOB_NAME"] == "j"
