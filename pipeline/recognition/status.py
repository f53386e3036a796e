from enum import Enum


class RecognitionStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


# -1 means no run has started or progress was explicitly reset
PROGRESS_NOT_STARTED = -1
PROGRESS_COMPLETE = 100
