from infra.pipeline.logger import PipelineLogger, create_logger
from infra.pipeline.errors import (
    RecognitionError,
    InventoryError,
    ProcessLaunchFailure,
    JobAlreadyRunning,
    RecognitionFailed,
)
from infra.pipeline.process import ProcessHandler
from infra.pipeline.storage import ProjectStorage

__all__ = [
    # Logger
    "PipelineLogger",
    "create_logger",

    # Errors
    "RecognitionError",
    "InventoryError",
    "ProcessLaunchFailure",
    "JobAlreadyRunning",
    "RecognitionFailed",

    # Process execution
    "ProcessHandler",

    # Storage
    "ProjectStorage",
]
