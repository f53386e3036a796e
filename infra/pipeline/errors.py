from typing import Optional


class RecognitionError(RuntimeError):
    """Base class for recognition job failures."""


class InventoryError(RecognitionError):
    """Page/segment directory traversal failed while building the inventory."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ProcessLaunchFailure(RecognitionError):
    """The external recognizer could not be started."""

    def __init__(self, program: str, reason: str):
        super().__init__(f"Could not start '{program}': {reason}")
        self.program = program
        self.reason = reason


class JobAlreadyRunning(RecognitionError):
    """start() was called while a previous run is still in progress."""


class RecognitionFailed(RecognitionError):
    """The recognizer exited with a non-zero exit code."""

    def __init__(self, program: str, returncode: int):
        super().__init__(f"'{program}' exited with code {returncode}")
        self.program = program
        self.returncode = returncode
