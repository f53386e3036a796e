from .status import RecognitionStatus, PROGRESS_COMPLETE, PROGRESS_NOT_STARTED
from .inventory import ProcessState, WorkInventory, iter_units
from .progress import ProgressTracker
from .cleanup import CleanupManager
from .controller import JobController

__all__ = [
    "RecognitionStatus",
    "PROGRESS_COMPLETE",
    "PROGRESS_NOT_STARTED",
    "ProcessState",
    "WorkInventory",
    "iter_units",
    "ProgressTracker",
    "CleanupManager",
    "JobController",
]
