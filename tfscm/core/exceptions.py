"""统一异常体系

所有业务异常继承 TfsError，CLI 层据此输出友好提示并以非零状态退出。

分类:
  - ExecutionError: 调用 tf 命令行失败（子进程 / IO 错误）
  - CheckoutCancelledError: 宿主发出的协作式中断
  - HistoryParseError: 历史输出语法不匹配，携带原始记录文本
  - ValidationError: 项目路径等配置项非法或缺失
"""

from __future__ import annotations


class TfsError(Exception):
    """框架基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(TfsError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(ConfigError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class ExecutionError(TfsError):
    """外部命令执行失败"""

    code = "EXECUTION_ERROR"

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class CheckoutCancelledError(TfsError):
    """操作被宿主中断，不做任何清理"""

    code = "CANCELLED"


class HistoryParseError(TfsError):
    """历史记录解析失败: 通常意味着 tf 输出格式变化或解析缺陷"""

    code = "PARSE_ERROR"

    def __init__(self, message: str, record: str = "") -> None:
        super().__init__(message)
        self.record = record

    def __str__(self) -> str:
        base = super().__str__()
        if not self.record:
            return base
        return f'{base} Changeset data = "\n{self.record}\n".'


class WorkspaceNotFoundError(TfsError):
    """服务器上不存在指定的工作空间"""

    code = "WORKSPACE_NOT_FOUND"


class JobNotFoundError(TfsError):
    """指定的作业未注册"""

    code = "JOB_NOT_FOUND"
