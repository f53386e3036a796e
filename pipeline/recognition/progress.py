from typing import Optional, Tuple

from infra.pipeline.storage.project_storage import ProjectStorage

from .inventory import ProcessState, iter_units
from .status import PROGRESS_COMPLETE


class ProgressTracker:
    """Completion tracking over the units of one run.

    A unit is done once its output artifact exists. Done flags are cached:
    a flag set to True is never checked against the filesystem again and
    never reverts within the run. Not thread-safe on its own; JobController
    serializes access.
    """

    def __init__(self, storage: ProjectStorage, state: Optional[ProcessState] = None):
        self.storage = storage
        self._state: ProcessState = state if state is not None else {}

    def reset(self, state: ProcessState) -> None:
        """Replace the tracked state wholesale (start of a new run)."""
        self._state = state

    @property
    def state(self) -> ProcessState:
        return self._state

    def poll(self) -> int:
        """Check undone units for their output and return percent complete.

        A state without units is trivially complete (100).
        """
        total = 0
        done = 0

        for page_id, segment_id, line_segment_id in iter_units(self._state):
            total += 1
            flags = self._state[page_id][segment_id]

            if flags[line_segment_id]:
                done += 1
                continue

            if self.storage.output_path(page_id, segment_id, line_segment_id).exists():
                flags[line_segment_id] = True
                done += 1

        return self.percent(done, total)

    @staticmethod
    def percent(done: int, total: int) -> int:
        """Integer percent, floored: 100 only once every unit is done."""
        if total == 0:
            return PROGRESS_COMPLETE
        return done * 100 // total

    def counts(self) -> Tuple[int, int]:
        """(done, total) from cached flags, without touching the filesystem."""
        total = 0
        done = 0
        for page_id, segment_id, line_segment_id in iter_units(self._state):
            total += 1
            if self._state[page_id][segment_id][line_segment_id]:
                done += 1
        return done, total

