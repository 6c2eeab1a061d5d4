"""项目路径映射

配置格式: 以 ";" 分隔多个条目，每个条目可用 ":" 指定本地子目录::

    $/proj/src ; $/proj/lib : lib

解析为有序的 (服务器路径, 本地路径) 列表。无 ":" 的条目映射到本地根目录，
有 ":" 的条目映射到 根目录 + "/" + 子目录。同一服务器路径重复出现时后者覆盖前者，
位置保持首次出现处。
"""

from __future__ import annotations

import logging
import re

from tfscm.core.exceptions import ValidationError
from tfscm.core.models import ProjectMapping

logger = logging.getLogger(__name__)

LOCAL_PATH_SEPARATOR = "/"
REPOSITORY_ROOT = "$/"

_ENTRY_SPLIT_RE = re.compile(r"\s*;\s*")
_PART_SPLIT_RE = re.compile(r"\s*:\s*")
_USER_NAME_RES = (
    re.compile(r"^\w+\\\w+$"),   # DOMAIN\user
    re.compile(r"^\w+@\w+"),     # user@domain
)


def _split_entries(project_paths: str) -> list[str]:
    return [e for e in _ENTRY_SPLIT_RE.split(project_paths.strip()) if e]


def parse_project_mappings(project_paths: str, local_root: str = ".") -> list[ProjectMapping]:
    """解析项目路径配置为有序映射列表

    异常:
        ValidationError: 配置为空，或某条目包含多个 ":"
    """
    entries = _split_entries(project_paths or "")
    if not entries:
        raise ValidationError("项目路径为必填")

    mappings: dict[str, str] = {}
    for entry in entries:
        parts = _PART_SPLIT_RE.split(entry)
        if len(parts) > 2:
            raise ValidationError(
                f"项目路径条目包含多个 ':'，无法确定本地目录: {entry}",
                details=[entry],
            )
        server_path = parts[0]
        if not server_path:
            raise ValidationError(f"项目路径条目缺少服务器路径: {entry}", details=[entry])
        local_path = local_root
        if len(parts) == 2 and parts[1]:
            local_path = f"{local_root}{LOCAL_PATH_SEPARATOR}{parts[1]}"
        if server_path in mappings:
            logger.warning("项目路径重复，后者覆盖前者: %s", server_path)
        mappings[server_path] = local_path

    return [ProjectMapping(path, local) for path, local in mappings.items()]


def get_project_paths(project_paths: str) -> list[str]:
    """只返回服务器路径"""
    return [m.project_path for m in parse_project_mappings(project_paths, "")]


def validate_project_path(project_paths: str) -> None:
    """校验每个条目的服务器路径都以 $/ 开头"""
    if not (project_paths or "").strip():
        raise ValidationError("项目路径为必填")
    bad = [
        path for path in get_project_paths(project_paths)
        if not path.startswith(REPOSITORY_ROOT)
    ]
    if bad:
        raise ValidationError(f"项目路径必须以 '{REPOSITORY_ROOT}' 开头", details=bad)


def validate_user_name(user_name: str) -> None:
    """登录名需包含域和用户: DOMAIN\\user 或 user@domain（允许为空）"""
    if not user_name:
        return
    if not any(r.match(user_name) for r in _USER_NAME_RES):
        raise ValidationError(f"登录名必须包含域和用户: {user_name}")
