"""tf 子命令参数构造与输出解析

每个函数只负责拼装子命令本身的参数；-server / -login 由 Server 统一追加。
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import NamedTuple

from tfscm.core.dates import format_tfs_datetime
from tfscm.utils.shell import ArgumentList

logger = logging.getLogger(__name__)

_DASH_LINE_RE = re.compile(r"^-+(\s+-+)*\s*$")


class WorkspaceRow(NamedTuple):
    """tf workspaces -format:brief 的一行"""

    name: str
    owner: str
    computer: str
    comment: str


# =========================================================================
# 工作空间
# =========================================================================

def list_workspaces_args() -> ArgumentList:
    return ArgumentList().add("workspaces", "-format:brief")


def new_workspace_args(name: str, owner: str = "") -> ArgumentList:
    spec = f"{name};{owner}" if owner else name
    return ArgumentList().add("workspace", "-new", spec, "-noprompt")


def delete_workspace_args(name: str, owner: str = "") -> ArgumentList:
    spec = f"{name};{owner}" if owner else name
    return ArgumentList().add("workspace", "-delete", spec, "-noprompt")


def parse_workspaces(output: str) -> list[WorkspaceRow]:
    """解析工作空间列表

    输出形如::

        Server: http://tfs:8080/
        Workspace Owner          Computer Comment
        --------- -------------- -------- -----------------
        Hudson-a  DOMAIN\\builder BUILD01  created by tfscm
    """
    rows: list[WorkspaceRow] = []
    in_table = False
    for line in output.splitlines():
        if not in_table:
            in_table = bool(_DASH_LINE_RE.match(line))
            continue
        if not line.strip():
            continue
        parts = line.split(None, 3)
        if len(parts) < 3:
            logger.warning("无法识别的工作空间行: %s", line)
            continue
        comment = parts[3].strip() if len(parts) > 3 else ""
        rows.append(WorkspaceRow(parts[0], parts[1], parts[2], comment))
    return rows


# =========================================================================
# 工作目录映射
# =========================================================================

def map_workfolder_args(project_path: str, local_path: str, workspace_name: str) -> ArgumentList:
    return ArgumentList().add(
        "workfold", "-map", project_path, local_path, f"-workspace:{workspace_name}",
    )


def unmap_workfolder_args(local_path: str, workspace_name: str) -> ArgumentList:
    return ArgumentList().add(
        "workfold", "-unmap", local_path, f"-workspace:{workspace_name}",
    )


# =========================================================================
# 文件同步 / 历史
# =========================================================================

def get_files_args(local_path: str, *, force: bool = False) -> ArgumentList:
    args = ArgumentList().add("get", local_path, "-recursive", "-noprompt")
    if force:
        args.add("-force")
    return args


def detailed_history_args(project_path: str, since: datetime, until: datetime) -> ArgumentList:
    version = f"-version:D{format_tfs_datetime(since)}~D{format_tfs_datetime(until)}"
    return ArgumentList().add(
        "history", project_path, "-noprompt", version, "-recursive", "-format:detailed",
    )
