"""工作空间名宏展开

支持的宏:
  - ${JOB_NAME}: 作业名
  - ${NODE_NAME}: 当前节点主机名
  - ${USER_NAME}: 当前系统用户
  - 其他任意环境变量

未知宏原样保留。
"""

from __future__ import annotations

import getpass
import logging
import os
import socket
from string import Template

logger = logging.getLogger(__name__)


def build_variables(job_name: str, env: dict[str, str] | None = None) -> dict[str, str]:
    """收集可用于宏展开的变量，作业变量优先于环境变量"""
    variables = dict(os.environ if env is None else env)
    variables["JOB_NAME"] = job_name
    variables.setdefault("NODE_NAME", socket.gethostname() or "MASTER")
    if "USER_NAME" not in variables:
        try:
            variables["USER_NAME"] = getpass.getuser()
        except (KeyError, OSError) as e:
            logger.warning("无法获取当前用户名: %s", e)
    return variables


def resolve_workspace_name(template: str, job_name: str, env: dict[str, str] | None = None) -> str:
    return Template(template).safe_substitute(build_variables(job_name, env))
