"""
Runtime configuration access.

The only environment variable used is LINEREC_PROJECTS_ROOT to locate the
projects. Everything else comes from each project's linerec.yaml.
"""

import os
from pathlib import Path


def get_projects_root() -> Path:
    """Get the projects root from environment."""
    return Path(os.getenv('LINEREC_PROJECTS_ROOT', '~/Documents/linerec')).expanduser().resolve()


def get_project_dir(project_id: str) -> Path:
    return get_projects_root() / project_id


class _ConfigCompat:
    """Attribute access to runtime settings for the CLI and web layers."""

    @property
    def projects_root(self) -> Path:
        return get_projects_root()


Config = _ConfigCompat()
