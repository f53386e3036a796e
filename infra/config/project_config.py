"""
Project configuration loading and management.

The project config is stored at {project_dir}/linerec.yaml and contains:
- Page directory layout and file extensions
- Image type (Binary or Gray)
- Recognizer executable and default arguments
"""

from pathlib import Path
from typing import Any, Optional
import yaml

from .schemas import ProjectConfig, ResolvedProjectConfig


CONFIG_FILENAME = "linerec.yaml"


class ProjectConfigManager:
    """
    Manages the project-level configuration.

    Usage:
        manager = ProjectConfigManager(project_dir)
        config = manager.load()       # Returns ProjectConfig
        manager.save(config)          # Persists to disk
        resolved = manager.resolve()  # Absolute paths, env vars expanded
    """

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir).expanduser().resolve()
        self.config_path = self.project_dir / CONFIG_FILENAME

    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def load(self) -> ProjectConfig:
        """
        Load project config from disk.

        Returns ProjectConfig with defaults if file doesn't exist.
        """
        if not self.config_path.exists():
            return ProjectConfig()

        with open(self.config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        return ProjectConfig.model_validate(data)

    def save(self, config: ProjectConfig) -> None:
        """
        Save project config to disk.

        Creates the project directory if needed.
        """
        self.project_dir.mkdir(parents=True, exist_ok=True)

        data = config.model_dump(mode="json", exclude_none=True)

        with open(self.config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def update(self, updates: dict) -> ProjectConfig:
        """
        Update specific fields in the config.

        Args:
            updates: Dict of fields to update (can be nested)

        Returns:
            Updated ProjectConfig
        """
        config = self.load()
        data = config.model_dump(mode="json")

        _deep_merge(data, updates)

        new_config = ProjectConfig.model_validate(data)
        self.save(new_config)
        return new_config

    def set_value(self, key: str, value: Any) -> ProjectConfig:
        """Set a single value addressed by a dotted key (e.g. recognizer.executable)."""
        updates: dict = {}
        cursor = updates
        parts = key.split(".")
        for part in parts[:-1]:
            cursor = cursor.setdefault(part, {})
        cursor[parts[-1]] = value
        return self.update(updates)

    def resolve(self, config: Optional[ProjectConfig] = None) -> ResolvedProjectConfig:
        if config is None:
            config = self.load()
        return ResolvedProjectConfig.from_config(self.project_dir, config)


def _deep_merge(base: dict, updates: dict) -> None:
    """
    Deep merge updates into base dict (mutates base).
    """
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def resolve_project_config(project_dir: Path) -> ResolvedProjectConfig:
    """
    Convenience function to get resolved project config.

    Args:
        project_dir: Directory of the project

    Returns:
        ResolvedProjectConfig with defaults and file overrides merged
    """
    manager = ProjectConfigManager(project_dir)
    return manager.resolve()
