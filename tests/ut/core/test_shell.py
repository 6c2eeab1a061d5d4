"""shell 工具单元测试"""

from __future__ import annotations

import sys

from tfscm.utils.shell import ArgumentList, LocalExecutor


class TestArgumentList:

    def test_add_chain(self):
        args = ArgumentList().add("get", ".").add("-recursive")
        assert args.to_list() == ["get", ".", "-recursive"]
        assert len(args) == 3

    def test_login_password_masked(self):
        args = ArgumentList().add("history", "$/p").add_masked("-login:DOMAIN\\bob,s3cret")
        assert args.masked() == "history $/p -login:DOMAIN\\bob,********"
        assert args.to_list()[-1] == "-login:DOMAIN\\bob,s3cret"

    def test_option_without_user_masked(self):
        args = ArgumentList().add_masked("-password:s3cret")
        assert args.masked() == "-password:********"

    def test_plain_value_masked(self):
        assert ArgumentList().add("a").add_masked("s3cret").masked() == "a ********"

    def test_to_list_is_copy(self):
        args = ArgumentList().add("a")
        args.to_list().append("b")
        assert args.to_list() == ["a"]


class TestLocalExecutor:

    def test_runs_command(self, tmp_path):
        r = LocalExecutor().execute([sys.executable, "-c", "print('hi')"], cwd=str(tmp_path))
        assert r.success
        assert r.stdout.strip() == "hi"

    def test_nonzero_exit(self):
        r = LocalExecutor().execute([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert not r.success
        assert r.returncode == 3

    def test_env_merged_with_process_environment(self, monkeypatch):
        monkeypatch.setenv("TFSCM_OUTER", "outer")
        code = "import os; print(os.environ['TFSCM_OUTER'], os.environ['TFSCM_INNER'])"
        r = LocalExecutor().execute([sys.executable, "-c", code], env={"TFSCM_INNER": "inner"})
        assert r.stdout.split() == ["outer", "inner"]

    def test_stdin_closed(self):
        r = LocalExecutor().execute([sys.executable, "-c", "import sys; print(repr(sys.stdin.read()))"])
        assert r.stdout.strip() == "''"
