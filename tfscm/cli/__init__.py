"""tfscm 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import functools
import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from tfscm import __version__
from tfscm.core.exceptions import TfsError
from tfscm.services.container import get_container
from tfscm.utils.logger import setup_logging

F = TypeVar("F", bound=Callable[..., Any])


def _svc() -> Any:
    """获取全局服务容器的快捷方式"""
    return get_container()


def _handle_errors(func: F) -> F:
    """业务异常转为友好提示，退出码 1"""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except TfsError as e:
            details = getattr(e, "details", None)
            if details:
                raise click.ClickException(f"[{e.code}] {e}: {', '.join(details)}") from e
            raise click.ClickException(f"[{e.code}] {e}") from e

    return wrapper  # type: ignore[return-value]


def _echo_changes(changes: list, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps([c.to_dict() for c in changes], indent=2, ensure_ascii=False))
        return
    if not changes:
        click.echo("没有变更。")
        return
    for c in changes:
        click.echo(f"  C{c.revision:<8s} {c.date:%Y-%m-%d %H:%M:%S}  {c.author}")
        if c.comment:
            for line in c.comment.splitlines():
                click.echo(f"      {line}")
        for item in c.items:
            click.echo(f"      [{item.action}] {item.path}")


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", default="configs/default.yml", help="配置文件路径")
def main(config_path: str) -> None:
    """tfscm - Team Foundation Server 检出与变更历史"""
    setup_logging(
        level=os.getenv("TFSCM_LOG_LEVEL", "INFO"),
        json_output=os.getenv("TFSCM_LOG_JSON", "") == "1",
    )
    if Path(config_path).exists():
        from tfscm.core.config import init_config
        try:
            init_config(config_path)
        except TfsError as e:
            raise click.ClickException(f"[{e.code}] {e}") from e


# 注册各领域子命令
from tfscm.cli.cmd_job import register as _reg_job  # noqa: E402
from tfscm.cli.cmd_scm import register as _reg_scm  # noqa: E402
from tfscm.cli.cmd_workspace import register as _reg_workspace  # noqa: E402

_reg_job(main)
_reg_scm(main)
_reg_workspace(main)
