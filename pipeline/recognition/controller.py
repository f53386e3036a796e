"""Recognition job controller.

Drives one external recognizer process per run over the line segment images
of the selected pages and tracks its completion percentage.

States:
    idle -> running -> completed | cancelled | failed

start() blocks until the recognizer exits. Callers that need to poll
progress or cancel while it runs call start() from their own thread;
get_progress(), cancel(), reset_progress() and get_status() are safe to call
concurrently. One lock guards the process state, the flags and the process
handle, so a cancel can never race with handle replacement.
"""

import threading
import time
from typing import Any, Callable, Dict, Iterable, List, Optional

from infra.pipeline.errors import (
    JobAlreadyRunning,
    RecognitionError,
    RecognitionFailed,
)
from infra.pipeline.process import ProcessHandler
from infra.pipeline.storage.project_storage import ProjectStorage

from .cleanup import CleanupManager
from .inventory import WorkInventory
from .progress import ProgressTracker
from .status import (
    PROGRESS_COMPLETE,
    PROGRESS_NOT_STARTED,
    RecognitionStatus,
)


class JobController:
    def __init__(
        self,
        storage: ProjectStorage,
        process_handler_factory: Callable[[bool], ProcessHandler] = ProcessHandler
    ):
        self.storage = storage
        self.inventory = WorkInventory(storage)
        self.tracker = ProgressTracker(storage)
        self.cleanup = CleanupManager(storage)

        self._process_handler_factory = process_handler_factory
        self._process_handler: Optional[ProcessHandler] = None

        self._lock = threading.RLock()
        self._running = False
        self._progress = PROGRESS_NOT_STARTED
        self._status = RecognitionStatus.IDLE
        self._run_id = 0
        self._returncode: Optional[int] = None
        self._last_error: Optional[str] = None

    @property
    def logger(self):
        return self.storage.logger("recognition")

    @property
    def process_handler(self) -> Optional[ProcessHandler]:
        with self._lock:
            return self._process_handler

    def start(self, page_ids: Iterable[str], tool_args: Optional[List[str]] = None) -> Optional[int]:
        """Run the recognizer over every line image of the given pages.

        Blocks until the process exits and returns its exit code (None if the
        run was cancelled or reset before the process ended).

        Raises:
            JobAlreadyRunning: a run is already in progress
            InventoryError: page/segment directories could not be listed
            ProcessLaunchFailure: the recognizer could not be started
            RecognitionFailed: non-zero exit code with strict_exit_code enabled

        On InventoryError and ProcessLaunchFailure the job stays flagged as
        running; callers are expected to call reset_progress().
        """
        page_ids = list(page_ids)
        tool_args = list(tool_args or [])
        config = self.storage.config

        with self._lock:
            if self._running:
                raise JobAlreadyRunning(
                    f"Recognition already running for project '{self.storage.project_id}'"
                )

            self._running = True
            self._progress = 0
            self._status = RecognitionStatus.RUNNING
            self._run_id += 1
            run_id = self._run_id
            self._returncode = None
            self._last_error = None

            try:
                self.logger.info(
                    f"Starting recognition: {len(page_ids)} pages",
                    page=page_ids
                )

                # Reset recognition data
                self.cleanup.delete_old_outputs(page_ids)
                state = self.inventory.initialize(page_ids)
                self.tracker.reset(state)

                command = self.inventory.flatten_to_input_paths(state)
                units = len(command)
                command.extend(tool_args)

                handler = self._process_handler_factory(config.fetch_console)
                self._process_handler = handler
                handler.start_process(config.executable, command, run_in_background=True)

                self.logger.info(
                    f"Started {config.executable}",
                    units=units,
                    tool_args=tool_args
                )
            except RecognitionError as e:
                self._last_error = str(e)
                self.logger.error("❌ Recognition failed to start", error=str(e))
                raise

        start_time = time.time()
        returncode = handler.wait()
        return self._finish(run_id, handler, returncode, time.time() - start_time)

    def _finish(
        self,
        run_id: int,
        handler: ProcessHandler,
        returncode: Optional[int],
        elapsed: float
    ) -> Optional[int]:
        config = self.storage.config

        with self._lock:
            if run_id == self._run_id:
                self._returncode = returncode

            # Cancelled, reset or superseded while the process was running
            if run_id != self._run_id or not self._running or handler.stop_requested:
                self.logger.info(
                    "Recognition process ended after cancellation",
                    returncode=returncode,
                    duration_seconds=round(elapsed, 2)
                )
                return None

            if returncode != 0 and config.strict_exit_code:
                self._progress = max(self._progress, self.tracker.poll())
                self._running = False
                self._status = RecognitionStatus.FAILED
                error = RecognitionFailed(config.executable, returncode)
                self._last_error = str(error)
                self.logger.error(
                    "❌ Recognition failed",
                    returncode=returncode,
                    progress=self._progress,
                    duration_seconds=round(elapsed, 2),
                    error=str(error)
                )
                raise error

            # Refresh done flags for get_status(); progress is 100 regardless
            self.tracker.poll()
            self._progress = PROGRESS_COMPLETE
            self._running = False
            self._status = RecognitionStatus.COMPLETED
            self.logger.info(
                "✅ Recognition complete",
                returncode=returncode,
                duration_seconds=round(elapsed, 2)
            )
            return returncode

    def get_progress(self) -> int:
        """Percent complete of the current run.

        Only recomputed while running; otherwise the last stored value is
        returned (-1 before the first run and after reset_progress()).
        """
        with self._lock:
            if not self._running or self._progress == PROGRESS_COMPLETE:
                return self._progress

            self._progress = max(self._progress, self.tracker.poll())
            return self._progress

    def cancel(self) -> None:
        """Ask the recognizer to stop and mark the job as not running.

        Does not wait for the process to exit.
        """
        with self._lock:
            if self._process_handler is not None:
                self._process_handler.stop_process()

            if self._running:
                self._status = RecognitionStatus.CANCELLED
                self.logger.info("Recognition cancelled", progress=self._progress)
            self._running = False

    def reset_progress(self) -> None:
        """Reset the progress (use if an error occurs)."""
        with self._lock:
            self._running = False
            self._progress = PROGRESS_NOT_STARTED
            self._status = RecognitionStatus.IDLE

    def is_running(self) -> bool:
        with self._lock:
            return self._running

    @property
    def status(self) -> RecognitionStatus:
        with self._lock:
            return self._status

    def get_status(self) -> Dict[str, Any]:
        with self._lock:
            done, total = self.tracker.counts()
            return {
                "status": self._status.value,
                "running": self._running,
                "progress": {
                    "percent": self._progress,
                    "total_items": total,
                    "completed_items": done,
                },
                "returncode": self._returncode,
                "error": self._last_error,
            }

    def get_console(self, stream: str = "out") -> str:
        """Captured stdout ("out") or stderr ("err") of the current or last process."""
        if stream not in ("out", "err"):
            raise ValueError(f"Unknown console stream: {stream}")

        handler = self.process_handler
        if handler is None:
            return ""
        return handler.console_output if stream == "out" else handler.console_error

    def get_valid_page_ids(self) -> List[str]:
        return self.storage.list_page_ids()

    def outputs_exist(self, page_ids: Iterable[str]) -> bool:
        return self.cleanup.outputs_exist(page_ids)

    def delete_old_outputs(self, page_ids: Iterable[str]) -> Dict[str, Any]:
        with self._lock:
            if self._running:
                raise JobAlreadyRunning(
                    f"Cannot delete outputs while recognition is running for '{self.storage.project_id}'"
                )
            return self.cleanup.delete_old_outputs(page_ids)
