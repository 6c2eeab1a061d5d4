"""tfscm 日志配置

命令结果写 stdout，日志统一写 stderr。支持人类可读文本和 JSON 两种格式，
JSON 便于构建流水线采集。
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO

# setup_logging / reset_logging 只增删带此名称的 handler
HANDLER_NAME = "tfscm"

TEXT_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """单行 JSON 日志

    通过 ``logger.info(..., extra={"job": name})`` 附带的作业名会输出为 "job" 字段。
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        job = getattr(record, "job", None)
        if job:
            entry["job"] = job
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_output: bool = False, stream: IO[str] | None = None) -> logging.Handler:
    """安装（或替换）tfscm 的根日志 handler

    参数:
        level: DEBUG / INFO / WARNING / ERROR，无法识别时按 INFO
        json_output: True 时输出 JSON
        stream: 输出流，默认 sys.stderr
    """
    reset_logging()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)
    return handler


def reset_logging() -> None:
    """移除 setup_logging 安装的 handler"""
    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(handler)
        handler.close()
