"""服务器路径（项目）上的文件同步与历史查询"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tfscm.core.history import HistoryParser
    from tfscm.services.tf.server import Server

from tfscm.core.models import ChangeSet
from tfscm.services.tf import commands

logger = logging.getLogger(__name__)


class Project:
    """一个服务器路径，如 $/proj/src"""

    def __init__(self, server: Server, project_path: str) -> None:
        self.server = server
        self.project_path = project_path

    def get_files(self, local_path: str) -> None:
        """把已映射的本地目录同步到最新版本"""
        self.server.execute(
            commands.get_files_args(local_path, force=self.server.force_get),
            with_server=False,
        )
        logger.info("文件已同步: %s -> %s", self.project_path, local_path)

    def get_detailed_history(
        self,
        since: datetime,
        until: datetime,
        parser: HistoryParser | None = None,
    ) -> list[ChangeSet]:
        """查询 [since, until] 区间内的变更集，按时间升序"""
        parser = parser or self.server.history_parser
        output = self.server.execute(
            commands.detailed_history_args(self.project_path, since, until),
        )
        changesets = parser.parse(output, since)
        logger.info("%s: %d 个变更集 (%s ~ %s)", self.project_path, len(changesets), since, until)
        return changesets

    def __repr__(self) -> str:
        return f"Project({self.project_path!r})"
