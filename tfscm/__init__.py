"""tfscm - Team Foundation Server 检出与变更历史集成"""

__version__ = "0.1.0"
