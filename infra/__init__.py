from infra.config import Config
from infra.pipeline.storage import ProjectStorage

from infra.pipeline import (
    PipelineLogger,
    create_logger,
    ProcessHandler,
)

__all__ = [
    "Config",

    "ProjectStorage",

    "PipelineLogger",
    "create_logger",
    "ProcessHandler",
]
