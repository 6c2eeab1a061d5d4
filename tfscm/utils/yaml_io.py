"""YAML 映射文件读写

配置文件与作业注册表都是顶层为字典的 YAML 文件：
  - 读取: 文件不存在视为空；格式错误或顶层不是字典 -> ConfigError
  - 写入: 同目录临时文件 + os.replace，中途失败不会留下半截文件
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

from tfscm.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# 作业注册表与配置都很小，超过此大小视为误指向
MAX_YAML_BYTES = 1024 * 1024


def read_yaml_mapping(path: str | Path) -> dict[str, Any]:
    """读取顶层为字典的 YAML 文件

    异常:
        ConfigError: 文件过大、YAML 语法错误或顶层不是字典
    """
    p = Path(path)
    if not p.is_file():
        return {}
    if p.stat().st_size > MAX_YAML_BYTES:
        raise ConfigError(f"YAML 文件过大: {p}")

    text = p.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML 格式错误: {p}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{p} 顶层必须是字典，实际为 {type(data).__name__}")
    return data


def write_yaml_mapping(path: str | Path, data: dict[str, Any]) -> None:
    """原子写入 YAML，保持键顺序并保留中文"""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    text = yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)

    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=p.parent, prefix=f".{p.name}.", suffix=".tmp", delete=False,
    ) as tmp:
        tmp.write(text)
    try:
        os.replace(tmp.name, p)
    except OSError:
        Path(tmp.name).unlink(missing_ok=True)
        raise
    logger.debug("已写入 %s", p)
