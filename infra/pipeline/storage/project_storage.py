import os
import threading
from pathlib import Path
from typing import Dict, List, Optional

from infra.config.project_config import ProjectConfigManager
from infra.config.schemas import ProjectConfig, ResolvedProjectConfig


class ProjectStorage:
    """Filesystem view of one recognition project.

    Layout:
        {projects_root}/{project_id}/linerec.yaml
        {projects_root}/{project_id}/{page_subdir}/{page_id}/{segment_id}/{unit}{ext}
        {projects_root}/{project_id}/logs/{stage}.jsonl

    Directories and loggers are created lazily to avoid creating
    empty folders when just reading status.
    """
    def __init__(
        self,
        project_id: str,
        projects_root: Optional[Path] = None,
        config: Optional[ProjectConfig] = None
    ):
        self._project_id = project_id
        self._projects_root = Path(projects_root or Path.home() / "Documents" / "linerec").expanduser()
        self._project_dir = self._projects_root / project_id
        self._config_override = config

        self._config: Optional[ResolvedProjectConfig] = None
        self._loggers: Dict[str, object] = {}
        self._lock = threading.Lock()

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def projects_root(self) -> Path:
        return self._projects_root

    @property
    def project_dir(self) -> Path:
        return self._project_dir

    @property
    def exists(self) -> bool:
        return self._project_dir.exists()

    @property
    def config_manager(self) -> ProjectConfigManager:
        return ProjectConfigManager(self._project_dir)

    @property
    def config(self) -> ResolvedProjectConfig:
        """Resolved project configuration, loaded once."""
        with self._lock:
            if self._config is None:
                self._config = self.config_manager.resolve(self._config_override)
            return self._config

    @property
    def page_dir(self) -> Path:
        return self.config.page_dir

    @property
    def log_dir(self) -> Path:
        return self._project_dir / "logs"

    def page_path(self, page_id: str) -> Path:
        return self.page_dir / page_id

    def input_path(self, page_id: str, segment_id: str, line_segment_id: str) -> Path:
        return self.page_dir / page_id / segment_id / f"{line_segment_id}{self.config.image_extension}"

    def output_path(self, page_id: str, segment_id: str, line_segment_id: str) -> Path:
        return self.page_dir / page_id / segment_id / f"{line_segment_id}{self.config.output_extension}"

    def list_page_ids(self) -> List[str]:
        """Page ids eligible for recognition: directories under the page root, sorted."""
        if not self.page_dir.exists():
            return []

        return sorted(
            item.name for item in self.page_dir.iterdir()
            if item.is_dir()
        )

    def logger(self, stage: str = "recognition"):
        """Get logger instance for a stage, creating lazily.

        Log file is written to {project}/logs/{stage}.jsonl
        """
        with self._lock:
            if stage not in self._loggers:
                from infra.pipeline.logger import create_logger
                log_level = "DEBUG" if os.environ.get("DEBUG", "").lower() in ("true", "1", "yes") else "INFO"
                self._loggers[stage] = create_logger(
                    self._project_id,
                    stage,
                    log_dir=self.log_dir,
                    level=log_level,
                )
            return self._loggers[stage]

    def close(self):
        with self._lock:
            for logger in self._loggers.values():
                logger.close()
            self._loggers.clear()
