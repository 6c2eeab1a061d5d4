"""共享 fixture: 独立配置 + 可编排输出的假 tf 执行器"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

import tfscm.core.config as cfgmod
from tfscm.services.container import reset_container
from tfscm.utils.shell import CommandResult


class FakeExecutor:
    """按子命令返回预设输出，并记录所有调用

    responses 的值可以是字符串、CommandResult 或接收完整命令的函数。
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.cwds: list[str] = []
        self.responses: dict[str, object] = {}

    def on(self, subcommand: str, response: str | CommandResult | Callable[[list[str]], object]) -> None:
        self.responses[subcommand] = response

    def execute(self, cmd, *, cwd=".", env=None, timeout=None) -> CommandResult:
        self.calls.append(list(cmd))
        self.cwds.append(cwd)
        response = self.responses.get(cmd[1], "")
        if callable(response):
            response = response(list(cmd))
        if isinstance(response, CommandResult):
            return response
        return CommandResult(returncode=0, stdout=str(response), stderr="")

    def subcommands(self) -> list[str]:
        return [c[1] for c in self.calls]


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """确保测试有独立的配置和数据目录"""
    cfg = cfgmod.Config(
        jobs_file=str(tmp_path / "jobs.yml"),
        workspace_dir=str(tmp_path / "ws"),
    )
    monkeypatch.setattr(cfgmod, "_current", cfg)
    reset_container()
    yield cfg
    reset_container()


@pytest.fixture()
def fake_executor() -> FakeExecutor:
    return FakeExecutor()
