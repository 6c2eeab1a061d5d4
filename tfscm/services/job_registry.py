"""作业注册表 - 作业源码配置的 CRUD 与上次构建时间

职责：
- 作业的注册、查询、列表、删除
- 注册时校验服务器地址、项目路径与登录名
- 记录上次成功检出的时间，供下次检出/轮询计算变更
"""

from __future__ import annotations

import logging
from dataclasses import asdict, fields
from datetime import datetime
from pathlib import Path
from typing import Any

from tfscm.core.exceptions import ConfigError, JobNotFoundError, ValidationError
from tfscm.core.models import ScmJob
from tfscm.core.project_path import validate_project_path, validate_user_name
from tfscm.utils.yaml_io import read_yaml_mapping, write_yaml_mapping

logger = logging.getLogger(__name__)


class JobRegistry:
    """作业注册表，持久化为 YAML::

        jobs:
          nightly:
            server_url: http://tfs:8080
            project_path: $/proj
            ...
    """

    SECTION = "jobs"

    def __init__(self, registry_file: str = "") -> None:
        if not registry_file:
            from tfscm.core.config import get_config
            registry_file = get_config().jobs_file
        self.registry_file = Path(registry_file)
        self._data = read_yaml_mapping(self.registry_file)
        if self._data.get(self.SECTION) is None:
            self._data[self.SECTION] = {}
        if not isinstance(self._data[self.SECTION], dict):
            raise ConfigError(f"{self.registry_file}: '{self.SECTION}' 必须是字典")

    @property
    def _jobs(self) -> dict[str, dict[str, Any]]:
        return self._data[self.SECTION]

    def _flush(self) -> None:
        write_yaml_mapping(self.registry_file, self._data)

    def register(self, job: ScmJob) -> dict[str, Any]:
        """注册（或覆盖）一个作业"""
        if not job.name:
            raise ValidationError("作业 name 为必填")
        if not job.server_url:
            raise ValidationError("server_url 为必填")
        validate_project_path(job.project_path)
        validate_user_name(job.user_name)

        entry = asdict(job)
        del entry["name"]
        self._jobs[job.name] = entry
        self._flush()
        logger.info("作业已注册: %s (%s)", job.name, job.server_url)
        return entry

    def get(self, name: str) -> ScmJob | None:
        entry = self._jobs.get(name)
        if entry is None:
            return None
        known = {f.name for f in fields(ScmJob)} - {"name"}
        return ScmJob(name=name, **{k: v for k, v in entry.items() if k in known})

    def require(self, name: str) -> ScmJob:
        job = self.get(name)
        if job is None:
            raise JobNotFoundError(f"作业未注册: {name}")
        return job

    def list_all(self) -> list[dict[str, Any]]:
        return [{"name": name, **entry} for name, entry in self._jobs.items()]

    def remove(self, name: str) -> bool:
        if self._jobs.pop(name, None) is None:
            return False
        self._flush()
        logger.info("作业已移除: %s", name)
        return True

    def record_build(self, name: str, timestamp: datetime) -> None:
        """记录上次成功检出时间"""
        entry = self._jobs.get(name)
        if entry is None:
            raise JobNotFoundError(f"作业未注册: {name}")
        entry["last_build"] = timestamp.isoformat()
        self._flush()
