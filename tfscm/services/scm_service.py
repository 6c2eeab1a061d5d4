"""源码管理服务: 宿主侧入口

把作业配置组装成 Server / CheckoutCoordinator 等协作对象：
  - checkout: 检出或更新，返回上次构建以来的变更集
  - poll: 是否有新变更（没有上次构建时总是 True）
  - remove_workspace: 删除作业对应的服务器端工作空间
  - unmap_workfolder: 取消工作空间中某个本地目录的映射
  - history: 指定时间范围内的变更集
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tfscm.core.config import Config
    from tfscm.core.dates import DateParser
    from tfscm.utils.shell import CommandExecutor

from tfscm.core.dates import FormatDateParser
from tfscm.core.history import HistoryParser
from tfscm.core.models import ChangeLogSet, ChangeSet, ScmJob
from tfscm.core.project_path import parse_project_mappings
from tfscm.services.checkout import CheckoutCoordinator, PollAction, RemoveWorkspaceAction
from tfscm.services.tf.server import Server
from tfscm.services.tf.tool import TfTool

logger = logging.getLogger(__name__)


class ScmService:
    """作业级源码管理操作"""

    def __init__(
        self,
        config: Config | None = None,
        executor: CommandExecutor | None = None,
        date_parser: DateParser | None = None,
    ) -> None:
        if config is None:
            from tfscm.core.config import get_config
            config = get_config()
        self.config = config
        self.executor = executor
        self.date_parser = date_parser or FormatDateParser(config.history_date_formats)

    def workspace_root(self, job: ScmJob) -> Path:
        """作业的本地工作根目录（宿主工作区）"""
        root = Path(self.config.workspace_dir) / job.name
        root.mkdir(parents=True, exist_ok=True)
        return root

    def create_server(
        self,
        job: ScmJob,
        root: str | Path,
        cancel_event: threading.Event | None = None,
    ) -> Server:
        tool = TfTool(
            executable=self.config.tf_executable,
            cwd=root,
            executor=self.executor,
            cancel_event=cancel_event,
        )
        parser = HistoryParser(self.date_parser, skip_date_check=self.config.skip_history_date_check)
        return Server(
            tool, job.server_url, job.user_name, job.user_password,
            force_get=self.config.force_get, history_parser=parser,
        )

    def checkout(
        self,
        job: ScmJob,
        root: str | Path | None = None,
        since: datetime | None = None,
        *,
        cancel_event: threading.Event | None = None,
        env: dict[str, str] | None = None,
    ) -> ChangeLogSet:
        root = Path(root) if root is not None else self.workspace_root(job)
        configuration = job.workspace_configuration(env)
        server = self.create_server(job, root, cancel_event)
        logger.info(
            "检出作业 %s: workspace=%s update=%s since=%s",
            job.name, configuration.workspace_name, job.use_update, since,
            extra={"job": job.name},
        )
        coordinator = CheckoutCoordinator(configuration, job.use_update)
        return ChangeLogSet(coordinator.checkout(server, root, since))

    def poll(self, job: ScmJob, root: str | Path | None = None) -> bool:
        root = Path(root) if root is not None else self.workspace_root(job)
        server = self.create_server(job, root)
        return PollAction(job.project_path).has_changes(server, job.last_build_time)

    def remove_workspace(
        self,
        job: ScmJob,
        root: str | Path | None = None,
        env: dict[str, str] | None = None,
    ) -> bool:
        root = Path(root) if root is not None else self.workspace_root(job)
        name = job.workspace_configuration(env).workspace_name
        return RemoveWorkspaceAction(name).remove(self.create_server(job, root))

    def unmap_workfolder(
        self,
        job: ScmJob,
        local_path: str,
        root: str | Path | None = None,
        env: dict[str, str] | None = None,
    ) -> None:
        """取消作业工作空间中某个本地目录的映射；工作空间不存在时抛 WorkspaceNotFoundError"""
        root = Path(root) if root is not None else self.workspace_root(job)
        name = job.workspace_configuration(env).workspace_name
        server = self.create_server(job, root)
        server.workspaces.get_workspace(name).unmap_workfolder(local_path)

    def history(
        self,
        job: ScmJob,
        since: datetime,
        until: datetime | None = None,
        root: str | Path | None = None,
    ) -> list[ChangeSet]:
        """按映射顺序拼接每个服务器路径在 [since, until] 的变更集"""
        root = Path(root) if root is not None else self.workspace_root(job)
        until = until or datetime.now(tz=since.tzinfo)
        server = self.create_server(job, root)
        changes: list[ChangeSet] = []
        for mapping in parse_project_mappings(job.project_path, job.local_path):
            changes.extend(server.get_project(mapping.project_path).get_detailed_history(since, until))
        return changes
