"""TFS 服务器连接

为每条 tf 子命令统一追加 -server 与 -login 参数（口令在日志中脱敏），
并作为 WorkspaceRegistry / Project 的工厂。
"""

from __future__ import annotations

import logging
from functools import cached_property

from tfscm.core.history import HistoryParser
from tfscm.services.tf.project import Project
from tfscm.services.tf.tool import TfTool
from tfscm.services.tf.workspaces import WorkspaceRegistry
from tfscm.utils.shell import ArgumentList

logger = logging.getLogger(__name__)


class Server:
    """一个 TFS 服务器 + 登录身份"""

    def __init__(
        self,
        tool: TfTool,
        url: str,
        user_name: str = "",
        password: str = "",
        *,
        force_get: bool | None = None,
        history_parser: HistoryParser | None = None,
    ) -> None:
        if force_get is None:
            from tfscm.core.config import get_config
            force_get = get_config().force_get
        self.tool = tool
        self.url = url
        self.user_name = user_name
        self.password = password
        self.force_get = force_get
        self.history_parser = history_parser or HistoryParser()

    @cached_property
    def workspaces(self) -> WorkspaceRegistry:
        return WorkspaceRegistry(self)

    def get_project(self, project_path: str) -> Project:
        return Project(self, project_path)

    def execute(self, arguments: ArgumentList, *, with_server: bool = True) -> str:
        """追加连接参数后执行"""
        if with_server and self.url:
            arguments.add(f"-server:{self.url}")
        if self.user_name:
            arguments.add_masked(f"-login:{self.user_name},{self.password}")
        return self.tool.execute(arguments)
