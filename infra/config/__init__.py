"""
Configuration management for linerec.

Per-project config: {projects_root}/{project_id}/linerec.yaml

Usage:
    from infra.config import ProjectConfigManager

    manager = ProjectConfigManager(project_dir)
    config = manager.load()
    resolved = manager.resolve()  # Absolute paths, env vars expanded
"""

from .schemas import (
    ImageType,
    RecognizerConfig,
    ProjectConfig,
    ResolvedProjectConfig,
    DEFAULT_IMAGE_EXTENSIONS,
    resolve_env_vars,
)

from .project_config import (
    ProjectConfigManager,
    resolve_project_config,
)

from .runtime import (
    Config,
    get_projects_root,
    get_project_dir,
)


__all__ = [
    "Config",
    # Schemas
    "ImageType",
    "RecognizerConfig",
    "ProjectConfig",
    "ResolvedProjectConfig",
    "DEFAULT_IMAGE_EXTENSIONS",
    "resolve_env_vars",
    # Project config
    "ProjectConfigManager",
    "resolve_project_config",
    # Runtime
    "get_projects_root",
    "get_project_dir",
]
