"""服务器端工作空间

Workspace 以 (name, owner, computer) 作为身份，comment 仅作描述不参与比较。
WorkspaceRegistry 每次都向服务器查询，不缓存列表，删除后的再次查询能反映真实状态。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tfscm.services.tf.server import Server

from tfscm.core.exceptions import WorkspaceNotFoundError
from tfscm.services.tf import commands

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Workspace:
    """服务器端工作空间"""

    name: str
    owner: str = ""
    computer: str = ""
    comment: str = field(default="", compare=False)
    server: Server | None = field(default=None, compare=False, repr=False)

    def _require_server(self) -> Server:
        if self.server is None:
            raise WorkspaceNotFoundError(f"工作空间未绑定服务器: {self.name}")
        return self.server

    def map_workfolder(self, project_path: str, local_path: str) -> None:
        """将服务器路径映射到本地目录"""
        server = self._require_server()
        server.execute(commands.map_workfolder_args(project_path, local_path, self.name))
        logger.info("已映射 %s -> %s (workspace=%s)", project_path, local_path, self.name)

    def unmap_workfolder(self, local_path: str) -> None:
        server = self._require_server()
        server.execute(commands.unmap_workfolder_args(local_path, self.name))
        logger.info("已取消映射 %s (workspace=%s)", local_path, self.name)


class WorkspaceRegistry:
    """工作空间查询 / 创建 / 删除"""

    def __init__(self, server: Server) -> None:
        self.server = server

    def list_workspaces(self) -> list[Workspace]:
        output = self.server.execute(commands.list_workspaces_args())
        return [
            Workspace(
                name=row.name, owner=row.owner, computer=row.computer,
                comment=row.comment, server=self.server,
            )
            for row in commands.parse_workspaces(output)
        ]

    def exists(self, workspace: str | Workspace) -> bool:
        name = workspace.name if isinstance(workspace, Workspace) else workspace
        return any(ws.name == name for ws in self.list_workspaces())

    def get_workspace(self, name: str) -> Workspace:
        for ws in self.list_workspaces():
            if ws.name == name:
                return ws
        raise WorkspaceNotFoundError(f"工作空间不存在: {name}")

    def new_workspace(self, name: str) -> Workspace:
        self.server.execute(commands.new_workspace_args(name, self.server.user_name))
        logger.info("已创建工作空间: %s", name)
        return Workspace(name=name, owner=self.server.user_name, server=self.server)

    def delete_workspace(self, workspace: Workspace) -> None:
        self.server.execute(commands.delete_workspace_args(workspace.name, workspace.owner))
        logger.info("已删除工作空间: %s (owner=%s)", workspace.name, workspace.owner)
