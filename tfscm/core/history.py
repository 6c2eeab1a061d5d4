"""tf detailed history 输出解析

输入为 ``tf history -format:detailed`` 的文本（新 -> 旧），输出按时间升序的 ChangeSet 列表。

分段:
  以分隔线（12 个以上 "-"）切分记录。第一条分隔线之前的内容丢弃，
  之后每遇到一条分隔线输出一条记录；流结束时输出最后一段。
  从未出现分隔线 = 没有历史，不视为错误。

单条记录语法（顺序固定）:
  修订号、作者、日期、注释块、文件项块。兼容两种头部::

      Changeset: 12495            100: alice: 2008-09-24
      User: DOMAIN\\alice           comment line
      Date: 2008-jun-27 13:21:25
                                    edit $/proj/file.txt
      Comment:
        comment line

      Items:
        edit $/proj/file.txt

  注释续行的两个空格缩进会被去掉。文件项行以空白缩进，格式为 "<动作> <路径>"，
  路径必须以 $/ 开头。任何不匹配都抛 HistoryParseError 并附带原始记录文本。
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Iterable, Iterator
from datetime import datetime

from tfscm.core.dates import DateParser, FormatDateParser, align_timezones
from tfscm.core.exceptions import HistoryParseError
from tfscm.core.models import ChangeItem, ChangeSet
from tfscm.core.project_path import REPOSITORY_ROOT

logger = logging.getLogger(__name__)

CHANGESET_SEPARATOR = "------------"

_SEPARATOR_RE = re.compile(r"-{12,}\s*")

# 紧凑头部 "100: alice: 2008-09-24"；作者取到第一个 ": " 为止，日期里的 "10:00:00" 不受影响
_COMPACT_HEADER_RE = re.compile(
    r"\s*(?P<revision>[0-9]+):[ \t]+(?P<author>[^\n]*?):[ \t]+(?P<date>[^\n]*?)[ \t]*(?=\n)"
)

# 带标签头部：三行 "标签: 值"
_LABELED_HEADER_RE = re.compile(
    r"\s*[^:\s][^:\n]*:[ \t]+(?P<revision>[0-9]+)[ \t]*\n"
    r"[^:\n]*:[ \t]+(?P<author>[^\n]*?)[ \t]*\n"
    r"[^:\n]*:[ \t]+(?P<date>[^\n]*?)[ \t]*(?=\n)"
)

_COMPACT_FIRST_LINE_RE = re.compile(r"\s*[0-9]+:[ \t]")

# 带 "Comment:" / "Items:" 标签的正文；标签不含空格，因此 "Check-in Notes:" 不会被误认
_LABELED_BODY_RE = re.compile(
    r"[^:]*:(?P<comment>.*)\n\n[^\n :]*:(?=\n  )(?P<items>.*?)(?:\n\n|\n?\Z)",
    re.DOTALL,
)

# 无标签正文：注释块与文件项块以空行分隔
_COMPACT_BODY_RE = re.compile(
    r"(?P<comment>.*)\n\n(?=[ \t]+\S)(?P<items>.*?)(?:\n\n|\n?\Z)",
    re.DOTALL,
)

_ITEM_RE = re.compile(r"[ \t]+(?P<action>\S(?:[^$\n]*\S)?) (?P<path>\S.*?)\s*$")


class _State(enum.Enum):
    BEFORE_FIRST_SEPARATOR = "before_first_separator"
    ACCUMULATING = "accumulating"


class HistoryParser:
    """detailed history 解析器

    参数:
        date_parser: 日期解析策略，默认按 Config.history_date_formats 解析
        skip_date_check: 为 True 时不按下界过滤，完全信任查询的版本范围
    """

    def __init__(
        self,
        date_parser: DateParser | None = None,
        *,
        skip_date_check: bool | None = None,
    ) -> None:
        if skip_date_check is None:
            from tfscm.core.config import get_config
            skip_date_check = get_config().skip_history_date_check
        self.date_parser = date_parser or FormatDateParser()
        self.skip_date_check = skip_date_check

    def parse(self, output: str | Iterable[str], since: datetime | None = None) -> list[ChangeSet]:
        """解析整段输出，返回按时间升序的变更集"""
        lines = output.splitlines() if isinstance(output, str) else output
        changesets: list[ChangeSet] = []
        for record in self.split_records(lines):
            changeset = self.parse_record(record, since)
            if changeset is not None:
                changesets.append(changeset)
        changesets.reverse()
        return changesets

    @staticmethod
    def split_records(lines: Iterable[str]) -> Iterator[str]:
        """按分隔线切分记录"""
        state = _State.BEFORE_FIRST_SEPARATOR
        buffer: list[str] = []
        for raw in lines:
            line = raw.rstrip("\r\n")
            if _SEPARATOR_RE.fullmatch(line):
                if state is _State.BEFORE_FIRST_SEPARATOR:
                    if any(part.strip() for part in buffer):
                        logger.debug("丢弃首条分隔线之前的输出: %d 行", len(buffer))
                    state = _State.ACCUMULATING
                else:
                    yield "".join(buffer)
                buffer = []
            else:
                buffer.append(line + "\n")

        if state is _State.ACCUMULATING:
            yield "".join(buffer)

    def parse_record(self, record: str, since: datetime | None = None) -> ChangeSet | None:
        """解析单条记录；早于 since 的记录返回 None，空白记录同样返回 None"""
        if not record.strip():
            return None

        header = _match_header(record)
        if header is None:
            raise HistoryParseError("Parse error. Unable to read the changeset header.", record)

        revision = header.group("revision")
        if int(revision) <= 0:
            raise HistoryParseError(f"Parse error. Invalid changeset number {revision!r}.", record)

        try:
            date = self.date_parser.parse(header.group("date"))
        except ValueError as e:
            raise HistoryParseError(f"Parse error. {e}.", record) from e

        if since is not None and not self.skip_date_check:
            date_cmp, since_cmp = align_timezones(date, since)
            if date_cmp < since_cmp:
                logger.debug("忽略早于 %s 的变更集 %s", since, revision)
                return None

        body = record[header.end():]
        m = _LABELED_BODY_RE.match(body) or _COMPACT_BODY_RE.match(body)
        items = self._parse_items(m.group("items"), record) if m else []
        if not items:
            raise HistoryParseError("Parse error. Unable to find an item within a changeset.", record)

        return ChangeSet(
            revision=revision,
            author=header.group("author").strip(),
            date=date,
            comment=_normalize_comment(m.group("comment")),
            items=items,
        )

    @staticmethod
    def _parse_items(block: str, record: str) -> list[ChangeItem]:
        items: list[ChangeItem] = []
        for line in block.split("\n"):
            if not line.strip():
                continue
            m = _ITEM_RE.match(line)
            if m is None:
                raise HistoryParseError(f"Parse error. Unable to read the item line {line.strip()!r}.", record)
            path = m.group("path")
            if not path.startswith(REPOSITORY_ROOT):
                raise HistoryParseError(
                    f'Parse error. Mistakenly identified "{path}" as an item, '
                    "but it does not appear to be a valid TFS path.",
                    record,
                )
            items.append(ChangeItem(path=path, action=m.group("action")))
        return items


def _match_header(record: str) -> re.Match[str] | None:
    # 按首行形状选择头部语法，数字作者名不会被当成标签
    if _COMPACT_FIRST_LINE_RE.match(record):
        return _COMPACT_HEADER_RE.match(record)
    return _LABELED_HEADER_RE.match(record)


def _normalize_comment(comment: str) -> str:
    return comment.replace("\n  ", "\n").strip()
