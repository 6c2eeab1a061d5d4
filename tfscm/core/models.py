"""核心数据模型

工作空间配置、变更集及作业定义集中定义于此。
Workspace 因持有服务器句柄放在 tfscm.services.tf.workspaces。
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, NamedTuple

from tfscm.core.config import get_config

# =========================================================================
# 工作空间配置
# =========================================================================


class ProjectMapping(NamedTuple):
    """服务器路径 -> 本地子目录"""

    project_path: str
    local_path: str


@dataclass(frozen=True)
class WorkspaceConfiguration:
    """一次检出所需的工作空间配置，四个原始字段全部参与相等比较"""

    server_url: str
    workspace_name: str
    project_path: str
    local_path: str = "."

    def project_mappings(self) -> list[ProjectMapping]:
        from tfscm.core.project_path import parse_project_mappings
        return parse_project_mappings(self.project_path, self.local_path)


# =========================================================================
# 变更集
# =========================================================================


@dataclass(frozen=True)
class ChangeItem:
    """变更集中的单个文件项"""

    path: str
    action: str


@dataclass
class ChangeSet:
    """一次提交的变更集"""

    revision: str
    author: str
    date: datetime
    comment: str = ""
    items: list[ChangeItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "revision": self.revision,
            "author": self.author,
            "date": self.date.isoformat(),
            "comment": self.comment,
            "items": [{"action": i.action, "path": i.path} for i in self.items],
        }


class ChangeLogSet:
    """单次构建的变更集序列（按时间升序）"""

    def __init__(self, changesets: list[ChangeSet] | None = None) -> None:
        self._changesets = list(changesets or [])

    @property
    def is_empty(self) -> bool:
        return not self._changesets

    def to_list(self) -> list[ChangeSet]:
        return list(self._changesets)

    def __iter__(self) -> Iterator[ChangeSet]:
        return iter(self._changesets)

    def __len__(self) -> int:
        return len(self._changesets)

    def __repr__(self) -> str:
        return f"ChangeLogSet({len(self._changesets)} changesets)"


# =========================================================================
# 作业定义（宿主侧持久化）
# =========================================================================


@dataclass
class ScmJob:
    """作业的源码管理配置

    local_path 为空时回落到 "."，workspace_name 为空时取 Config.default_workspace_name。
    工作空间名可包含 ${JOB_NAME} 等宏。
    """

    name: str
    server_url: str
    project_path: str
    local_path: str = "."
    workspace_name: str = ""
    use_update: bool = False
    user_name: str = ""
    user_password: str = ""
    last_build: str = ""       # 上次成功检出的 ISO 时间戳

    def __post_init__(self) -> None:
        if not (self.local_path or "").strip():
            self.local_path = "."
        if not (self.workspace_name or "").strip():
            self.workspace_name = get_config().default_workspace_name

    @property
    def last_build_time(self) -> datetime | None:
        if not self.last_build:
            return None
        return datetime.fromisoformat(self.last_build)

    def workspace_configuration(self, env: dict[str, str] | None = None) -> WorkspaceConfiguration:
        """解析工作空间名中的宏，生成本次检出的配置"""
        from tfscm.core.variables import resolve_workspace_name
        return WorkspaceConfiguration(
            server_url=self.server_url,
            workspace_name=resolve_workspace_name(self.workspace_name, self.name, env),
            project_path=self.project_path,
            local_path=self.local_path,
        )
