"""
Recognition job registry for the web API.

One JobController per project, kept for the lifetime of the app so progress
and console output survive between requests. Runs execute on daemon threads.
"""

import threading
from pathlib import Path
from typing import Dict, List, Optional

from infra.pipeline.errors import (
    InventoryError,
    JobAlreadyRunning,
    ProcessLaunchFailure,
    RecognitionError,
)
from infra.pipeline.storage.project_storage import ProjectStorage
from pipeline.recognition import JobController


class RecognitionJobs:
    def __init__(self, projects_root: Path):
        self.projects_root = Path(projects_root)
        self._controllers: Dict[str, JobController] = {}
        self._threads: Dict[str, threading.Thread] = {}
        self._lock = threading.Lock()

    def project_exists(self, project_id: str) -> bool:
        return (self.projects_root / project_id).is_dir()

    def get_controller(self, project_id: str) -> JobController:
        with self._lock:
            controller = self._controllers.get(project_id)
            if controller is None:
                storage = ProjectStorage(project_id, projects_root=self.projects_root)
                controller = JobController(storage)
                self._controllers[project_id] = controller
            return controller

    def is_busy(self, project_id: str) -> bool:
        """True while a run thread is alive or the controller reports running."""
        controller = self.get_controller(project_id)
        with self._lock:
            thread = self._threads.get(project_id)
            thread_alive = thread is not None and thread.is_alive()
        return thread_alive or controller.is_running()

    def start(self, project_id: str, page_ids: List[str], tool_args: Optional[List[str]] = None) -> threading.Thread:
        """Start a run on a daemon thread.

        Raises JobAlreadyRunning if the project has a run in progress.
        """
        controller = self.get_controller(project_id)

        with self._lock:
            thread = self._threads.get(project_id)
            if (thread is not None and thread.is_alive()) or controller.is_running():
                raise JobAlreadyRunning(f"Recognition already running for project '{project_id}'")

            thread = threading.Thread(
                target=_run_job,
                args=(controller, list(page_ids), list(tool_args or [])),
                name=f"recognition-{project_id}",
                daemon=True,
            )
            self._threads[project_id] = thread
            thread.start()

        return thread

    def wait(self, project_id: str, timeout: Optional[float] = None) -> None:
        with self._lock:
            thread = self._threads.get(project_id)
        if thread is not None:
            thread.join(timeout)


def _run_job(controller: JobController, page_ids: List[str], tool_args: List[str]) -> None:
    try:
        controller.start(page_ids, tool_args)
    except (InventoryError, ProcessLaunchFailure):
        # Start failures leave the job flagged as running
        controller.reset_progress()
    except RecognitionError:
        # Already logged; exposed through get_status()
        return
