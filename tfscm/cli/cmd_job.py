"""作业管理命令"""

from __future__ import annotations

from typing import Any

import click

from tfscm.cli import _handle_errors, _svc
from tfscm.core.models import ScmJob


def register(group: click.Group) -> None:
    group.add_command(job_group)


@click.group(name="job")
def job_group() -> None:
    """作业源码配置管理"""


@job_group.command(name="add")
@click.argument("name")
@click.option("--server", "server_url", required=True, help="TFS 服务器地址")
@click.option("--project-path", required=True, help="服务器路径，多个以 ';' 分隔，可用 ':' 指定子目录")
@click.option("--local-path", default=".", help="本地工作目录（相对作业工作区）")
@click.option("--workspace-name", default="", help="服务器端工作空间名，支持 ${JOB_NAME} 等宏（默认取配置 default_workspace_name）")
@click.option("--update/--no-update", "use_update", default=False, help="增量更新（复用已有工作空间）")
@click.option("--user", "user_name", default="", help="登录名: DOMAIN\\user 或 user@domain")
@click.option("--password", "user_password", default="", envvar="TFSCM_PASSWORD", help="登录口令")
@_handle_errors
def job_add(name: str, **kwargs: Any) -> None:
    """注册作业"""
    _svc().jobs.register(ScmJob(name=name, **kwargs))
    click.echo(f"作业已注册: {name}")


@job_group.command(name="list")
@_handle_errors
def job_list() -> None:
    """列出已注册的作业"""
    jobs = _svc().jobs.list_all()
    if not jobs:
        click.echo("没有已注册的作业。")
        return
    for j in jobs:
        mode = "update" if j.get("use_update") else "clean"
        last = j.get("last_build") or "-"
        click.echo(f"  {j['name']:20s} [{mode:6s}] {j.get('project_path', '')}  last={last}")


@job_group.command(name="remove")
@click.argument("name")
@_handle_errors
def job_remove(name: str) -> None:
    """移除作业"""
    if _svc().jobs.remove(name):
        click.echo(f"作业已移除: {name}")
    else:
        click.echo(f"作业不存在: {name}")
