"""检出协调器

职责：
- 决定复用 / 重建 / 删除服务器端工作空间
- 同步每个映射路径的文件
- 汇总上次构建以来的变更集

流程（useUpdate = 增量复用）:
  1. 工作空间存在且非增量模式 -> 删除（全新检出）
  2. 再次查询；不存在 -> 非增量时清空本地目录内容 -> 新建 -> 按顺序映射
     仍存在 -> 原样复用，不删除、不重映射、不清理
  3. 每个映射路径强制执行 get
  4. since 非空时逐路径查询 [since, 当前时刻] 的历史并按映射顺序拼接

任何失败立即中止，不重试，不报告部分成功。
"""

from __future__ import annotations

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tfscm.core.models import ChangeSet, WorkspaceConfiguration
    from tfscm.services.tf.server import Server

from tfscm.core.project_path import parse_project_mappings

logger = logging.getLogger(__name__)


def _now(reference: datetime) -> datetime:
    """与 since 同类（naive / aware）的当前时刻"""
    return datetime.now(tz=reference.tzinfo)


def delete_contents(directory: Path) -> int:
    """删除目录下全部内容，目录本身保留；返回删除的条目数"""
    count = 0
    for child in directory.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
        count += 1
    return count


class CheckoutCoordinator:
    """单次检出 / 更新"""

    def __init__(self, configuration: WorkspaceConfiguration, use_update: bool) -> None:
        self.configuration = configuration
        self.use_update = use_update

    def checkout(self, server: Server, root: str | Path, since: datetime | None = None) -> list[ChangeSet]:
        root = Path(root)
        name = self.configuration.workspace_name
        # 配置错误须在任何远程交互之前暴露
        mappings = parse_project_mappings(self.configuration.project_path, self.configuration.local_path)
        workspaces = server.workspaces

        if workspaces.exists(name) and not self.use_update:
            logger.info("全新检出，删除已有工作空间: %s", name)
            workspaces.delete_workspace(workspaces.get_workspace(name))

        projects = [(server.get_project(m.project_path), m.local_path) for m in mappings]

        if not workspaces.exists(name):
            if not self.use_update:
                for _project, local_path in projects:
                    self._clean_local(root / local_path)
            workspace = workspaces.new_workspace(name)
            for project, local_path in projects:
                workspace.map_workfolder(project.project_path, local_path)
        else:
            logger.info("复用已有工作空间: %s", name)

        changes: list[ChangeSet] = []
        for project, local_path in projects:
            project.get_files(local_path)
            if since is not None:
                # 每个路径各自取当前时刻
                changes.extend(project.get_detailed_history(since, _now(since)))
        return changes

    def _clean_local(self, directory: Path) -> None:
        if not directory.exists():
            return
        count = delete_contents(directory)
        logger.info("已清空本地目录 %s (%d 项)", directory, count)


class RemoveWorkspaceAction:
    """删除服务器端工作空间（若存在）"""

    def __init__(self, workspace_name: str) -> None:
        self.workspace_name = workspace_name

    def remove(self, server: Server) -> bool:
        workspaces = server.workspaces
        if not workspaces.exists(self.workspace_name):
            logger.info("工作空间不存在，无需删除: %s", self.workspace_name)
            return False
        workspaces.delete_workspace(workspaces.get_workspace(self.workspace_name))
        return True


class PollAction:
    """轮询：自上次构建以来是否有新变更"""

    def __init__(self, project_path: str) -> None:
        self.project_path = project_path

    def has_changes(self, server: Server, last_build: datetime | None) -> bool:
        if last_build is None:
            return True
        until = _now(last_build)
        for mapping in parse_project_mappings(self.project_path):
            if server.get_project(mapping.project_path).get_detailed_history(last_build, until):
                return True
        return False
