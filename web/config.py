"""
Web application configuration.

Mirrors infra.config.Config for the web API.
"""

import os
from pathlib import Path


class Config:
    """Web app configuration."""

    PROJECTS_ROOT = Path(
        os.getenv("LINEREC_PROJECTS_ROOT", "~/Documents/linerec")
    ).expanduser()

    HOST = os.getenv("WEB_HOST", "127.0.0.1")
    PORT = int(os.getenv("WEB_PORT", "1337"))
    DEBUG = os.getenv("WEB_DEBUG", "false").lower() == "true"
