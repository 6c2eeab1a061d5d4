"""tf 命令行调用

TfTool 通过 CommandExecutor 执行 tf 子命令：
- 非零退出码 -> ExecutionError
- 取消事件已置位 / 收到 KeyboardInterrupt -> CheckoutCancelledError
- 不设超时，超时与强杀策略由执行器负责
"""

from __future__ import annotations

import logging
import subprocess
import threading
from pathlib import Path

from tfscm.core.exceptions import CheckoutCancelledError, ExecutionError
from tfscm.utils.shell import ArgumentList, CommandExecutor, LocalExecutor

logger = logging.getLogger(__name__)


class TfTool:
    """tf 可执行文件包装"""

    def __init__(
        self,
        executable: str = "",
        cwd: str | Path = ".",
        executor: CommandExecutor | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        if not executable:
            from tfscm.core.config import get_config
            executable = get_config().tf_executable
        self.executable = executable
        self.cwd = Path(cwd)
        self.executor = executor or LocalExecutor()
        self.cancel_event = cancel_event

    def check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise CheckoutCancelledError("操作已被中断")

    def execute(self, arguments: ArgumentList) -> str:
        """执行 tf 子命令，返回标准输出"""
        self.check_cancelled()
        logger.info("  tf: %s (cwd=%s)", arguments.masked(), self.cwd)
        cmd = [self.executable, *arguments.to_list()]
        try:
            r = self.executor.execute(cmd, cwd=str(self.cwd))
        except KeyboardInterrupt as e:
            raise CheckoutCancelledError("操作已被中断") from e
        except (OSError, subprocess.SubprocessError) as e:
            raise ExecutionError(f"tf 调用失败: {e}") from e
        self.check_cancelled()
        if not r.success:
            detail = (r.stderr or r.stdout).strip()[:500]
            raise ExecutionError(
                f"tf {arguments.to_list()[0]}失败 (rc={r.returncode}): {detail}",
                returncode=r.returncode,
            )
        return r.stdout
