"""服务容器: 统一依赖注入

CLI 通过 get_container() 获取服务，同一容器内的实例共享配置与执行器。

用法:
    container = ServiceContainer()
    job = container.jobs.require("nightly")
    changes = container.scm.checkout(job)

    # 测试时注入假执行器
    container = ServiceContainer(config=cfg, executor=FakeExecutor())
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tfscm.core.config import Config
    from tfscm.services.job_registry import JobRegistry
    from tfscm.services.scm_service import ScmService
    from tfscm.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器"""

    def __init__(self, config: Config | None = None, executor: CommandExecutor | None = None) -> None:
        self._instances: dict[str, object] = {}
        if config is None:
            from tfscm.core.config import get_config
            config = get_config()
        self._config = config
        self._executor = executor

    @property
    def config(self) -> Config:
        return self._config

    @property
    def jobs(self) -> JobRegistry:
        if "jobs" not in self._instances:
            from tfscm.services.job_registry import JobRegistry
            self._instances["jobs"] = JobRegistry(registry_file=self._config.jobs_file)
        return self._instances["jobs"]  # type: ignore[return-value]

    @property
    def scm(self) -> ScmService:
        if "scm" not in self._instances:
            from tfscm.services.scm_service import ScmService
            self._instances["scm"] = ScmService(config=self._config, executor=self._executor)
        return self._instances["scm"]  # type: ignore[return-value]


# ---- 全局单例 ----

_global: ServiceContainer | None = None
_global_lock = threading.Lock()


def get_container() -> ServiceContainer:
    """获取全局 ServiceContainer 单例（线程安全）"""
    global _global  # noqa: PLW0603
    if _global is not None:
        return _global
    with _global_lock:
        if _global is None:
            _global = ServiceContainer()
        return _global


def set_container(container: ServiceContainer) -> None:
    """替换全局容器（用于测试注入）"""
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = container


def reset_container() -> None:
    """重置全局容器（仅用于测试）"""
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = None
