"""tf 命令行适配层

拆分说明：
- tool.py: 子进程调用、取消与失败语义
- commands.py: 子命令参数构造与列表输出解析
- server.py: -server/-login 参数与工厂
- workspaces.py: 工作空间查询/创建/删除/映射
- project.py: 文件同步与历史查询
"""

from tfscm.services.tf.project import Project
from tfscm.services.tf.server import Server
from tfscm.services.tf.tool import TfTool
from tfscm.services.tf.workspaces import Workspace, WorkspaceRegistry

__all__ = [
    "Project",
    "Server",
    "TfTool",
    "Workspace",
    "WorkspaceRegistry",
]
