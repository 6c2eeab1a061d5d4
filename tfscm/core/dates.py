"""历史输出日期解析策略

tf 的 detailed history 按客户端 locale 输出日期，不同部署格式不一。
HistoryParser 依赖 DateParser 协议，按部署替换实现即可。
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Protocol

# tf -version:D<from>~D<to> 参数使用的 UTC 时间格式
TFS_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class DateParser(Protocol):
    """日期解析协议，无法解析时抛 ValueError"""

    def parse(self, text: str) -> datetime:
        ...


class FormatDateParser:
    """按顺序尝试 strptime 格式，最后回退到 ISO 8601"""

    def __init__(self, formats: Sequence[str] | None = None) -> None:
        if formats is None:
            from tfscm.core.config import get_config
            formats = get_config().history_date_formats
        self.formats = list(formats)

    def parse(self, text: str) -> datetime:
        value = text.strip()
        for fmt in self.formats:
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            raise ValueError(f"无法解析日期: {text!r}") from None


def format_tfs_datetime(value: datetime) -> str:
    """格式化为 tf 版本规格使用的 UTC 时间；naive 值视为本地时间"""
    return value.astimezone(timezone.utc).strftime(TFS_DATETIME_FORMAT)


def align_timezones(value: datetime, reference: datetime) -> tuple[datetime, datetime]:
    """naive/aware 混合比较时，借用另一侧的 tzinfo"""
    if value.tzinfo is None and reference.tzinfo is not None:
        value = value.replace(tzinfo=reference.tzinfo)
    elif value.tzinfo is not None and reference.tzinfo is None:
        reference = reference.replace(tzinfo=value.tzinfo)
    return value, reference
