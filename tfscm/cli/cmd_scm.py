"""检出 / 轮询 / 历史命令"""

from __future__ import annotations

from datetime import datetime

import click

from tfscm.cli import _echo_changes, _handle_errors, _svc


def register(group: click.Group) -> None:
    group.add_command(checkout)
    group.add_command(poll)
    group.add_command(history)


@click.command()
@click.argument("job_name")
@click.option("--root", default=None, help="作业工作区目录（默认 workspace_dir/<作业名>）")
@click.option("--since", type=click.DateTime(), default=None, help="变更起点（默认上次成功检出时间）")
@click.option("--json", "as_json", is_flag=True, help="以 JSON 输出变更集")
@click.option("--record/--no-record", default=True, help="成功后记录本次检出时间")
@_handle_errors
def checkout(job_name: str, root: str | None, since: datetime | None, as_json: bool, record: bool) -> None:
    """检出或更新作业工作区，并输出上次构建以来的变更"""
    svc = _svc()
    job = svc.jobs.require(job_name)
    started = datetime.now().astimezone()
    changes = svc.scm.checkout(job, root, since or job.last_build_time)
    if record:
        svc.jobs.record_build(job_name, started)
    _echo_changes(changes.to_list(), as_json)


@click.command()
@click.argument("job_name")
@click.option("--root", default=None, help="作业工作区目录")
@_handle_errors
def poll(job_name: str, root: str | None) -> None:
    """检查上次构建以来是否有新变更"""
    svc = _svc()
    job = svc.jobs.require(job_name)
    if svc.scm.poll(job, root):
        click.echo("有新变更")
    else:
        click.echo("没有新变更")


@click.command()
@click.argument("job_name")
@click.option("--since", type=click.DateTime(), required=True, help="起始时间")
@click.option("--until", type=click.DateTime(), default=None, help="结束时间（默认当前）")
@click.option("--root", default=None, help="作业工作区目录")
@click.option("--json", "as_json", is_flag=True, help="以 JSON 输出变更集")
@_handle_errors
def history(
    job_name: str, since: datetime, until: datetime | None, root: str | None, as_json: bool,
) -> None:
    """查询作业服务器路径在时间范围内的变更集"""
    svc = _svc()
    job = svc.jobs.require(job_name)
    _echo_changes(svc.scm.history(job, since, until, root), as_json)
