"""子进程调用

- ArgumentList: 有序参数，口令类参数在日志中脱敏
- CommandExecutor: 执行器协议，TfTool 只依赖它，测试注入假实现
- LocalExecutor: 本机 subprocess 实现
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)

MASK = "********"


@dataclass
class CommandResult:
    """一次命令调用的退出码与输出"""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


@dataclass
class ArgumentList:
    """有序命令参数，add_masked 加入的参数在 masked() 中隐藏口令"""

    _args: list[str] = field(default_factory=list)
    _masked: set[int] = field(default_factory=set)

    def add(self, *args: str) -> ArgumentList:
        self._args.extend(args)
        return self

    def add_masked(self, arg: str) -> ArgumentList:
        self._masked.add(len(self._args))
        self._args.append(arg)
        return self

    def to_list(self) -> list[str]:
        return list(self._args)

    def masked(self) -> str:
        """日志用命令行"""
        return " ".join(
            _mask_value(arg) if i in self._masked else arg
            for i, arg in enumerate(self._args)
        )

    def __len__(self) -> int:
        return len(self._args)


def _mask_value(arg: str) -> str:
    # -login:user,password 保留用户名
    option, colon, value = arg.partition(":")
    if not (arg.startswith("-") and colon):
        return MASK
    user, comma, _secret = value.partition(",")
    return f"{option}:{user},{MASK}" if comma else f"{option}:{MASK}"


class CommandExecutor(Protocol):
    """执行器协议: 运行命令并返回 CommandResult，非零退出码不抛异常"""

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        ...


class LocalExecutor:
    """本机执行

    参数:
        encoding: 解码 tf 输出的编码；Windows 上 tf 按控制台代码页输出，可按部署指定
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        # stdin 关闭：tf 缺少凭据时会交互式提示，关闭后直接失败
        r = subprocess.run(
            cmd,
            cwd=cwd,
            env={**os.environ, **env} if env else None,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            encoding=self.encoding,
            errors="replace",
            check=False,
            timeout=timeout,
        )
        logger.debug("%s 退出码 %d", cmd[0], r.returncode)
        return CommandResult(r.returncode, r.stdout, r.stderr)
