"""全局配置

tf 可执行文件、作业数据目录、默认工作空间名与历史解析选项。
CLI 入口用 init_config 从 YAML 加载，其余模块通过 get_config 读取，测试可直接替换。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields

from tfscm.core.exceptions import ConfigError
from tfscm.utils.yaml_io import read_yaml_mapping

logger = logging.getLogger(__name__)

DEFAULT_WORKSPACE_NAME = "Hudson-${JOB_NAME}"

# tf history -format:detailed 的日期输出随服务器/客户端 locale 变化
DEFAULT_DATE_FORMATS: list[str] = [
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
    "%Y-%b-%d %H:%M:%S",
    "%A, %B %d, %Y %I:%M:%S %p",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %H:%M:%S",
    "%d.%m.%Y %H:%M:%S",
    "%d/%m/%Y %H:%M:%S",
]


@dataclass
class Config:
    """框架全局配置"""

    # tf 命令行
    tf_executable: str = "tf"
    force_get: bool = False

    # 目录
    jobs_file: str = "data/jobs.yml"
    workspace_dir: str = "data/workspaces"

    # 工作空间
    default_workspace_name: str = DEFAULT_WORKSPACE_NAME

    # 历史解析
    skip_history_date_check: bool = False
    history_date_formats: list[str] = field(default_factory=lambda: list(DEFAULT_DATE_FORMATS))

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = "configs/default.yml") -> Config:
        """从 YAML 文件加载配置，文件不存在时全部取默认值

        未知字段放入 extra；已知字段类型与默认值不一致时抛 ConfigError。
        """
        data = read_yaml_mapping(path)
        defaults = cls()
        known = {f.name for f in fields(cls)} - {"extra"}
        fields_ = {}
        extra = {}
        for key, value in data.items():
            if key not in known:
                extra[key] = value
                continue
            expected = type(getattr(defaults, key))
            if not isinstance(value, expected):
                raise ConfigError(
                    f"配置项 {key} 应为 {expected.__name__}，实际为 {type(value).__name__}: {path}"
                )
            fields_[key] = value
        if any(not isinstance(f, str) for f in fields_.get("history_date_formats", [])):
            raise ConfigError(f"history_date_formats 只能包含字符串: {path}")
        return cls(**fields_, extra=extra)

    def to_dict(self) -> dict:
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = "configs/default.yml") -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
