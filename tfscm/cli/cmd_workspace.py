"""服务器端工作空间命令"""

from __future__ import annotations

import click

from tfscm.cli import _handle_errors, _svc


def register(group: click.Group) -> None:
    group.add_command(workspace_group)


@click.group(name="workspace")
def workspace_group() -> None:
    """服务器端工作空间管理"""


@workspace_group.command(name="list")
@click.argument("job_name")
@click.option("--root", default=None, help="作业工作区目录")
@_handle_errors
def workspace_list(job_name: str, root: str | None) -> None:
    """列出作业所在服务器上的工作空间"""
    svc = _svc()
    job = svc.jobs.require(job_name)
    server = svc.scm.create_server(job, root or svc.scm.workspace_root(job))
    workspaces = server.workspaces.list_workspaces()
    if not workspaces:
        click.echo("服务器上没有工作空间。")
        return
    for ws in workspaces:
        click.echo(f"  {ws.name:30s} owner={ws.owner:20s} computer={ws.computer}  {ws.comment}")


@workspace_group.command(name="remove")
@click.argument("job_name")
@click.option("--root", default=None, help="作业工作区目录")
@_handle_errors
def workspace_remove(job_name: str, root: str | None) -> None:
    """删除作业对应的服务器端工作空间"""
    svc = _svc()
    job = svc.jobs.require(job_name)
    if svc.scm.remove_workspace(job, root):
        click.echo("工作空间已删除")
    else:
        click.echo("工作空间不存在")


@workspace_group.command(name="unmap")
@click.argument("job_name")
@click.argument("local_path")
@click.option("--root", default=None, help="作业工作区目录")
@_handle_errors
def workspace_unmap(job_name: str, local_path: str, root: str | None) -> None:
    """取消作业工作空间中某个本地目录的映射"""
    svc = _svc()
    job = svc.jobs.require(job_name)
    svc.scm.unmap_workfolder(job, local_path, root)
    click.echo(f"已取消映射: {local_path}")
