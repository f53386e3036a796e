"""Line segment inventory for a recognition run.

Builds the ProcessState map from the page directory tree:

    {
        "0002": {
            "0002__000__paragraph": {
                "0002__000__paragraph__000": False,
                "0002__000__paragraph__001": False,
            },
        },
    }

pageId -> segmentId -> lineSegmentId -> processed flag. Keys are sorted at
every level so iteration order is reproducible.
"""

from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Tuple

from infra.pipeline.errors import InventoryError
from infra.pipeline.storage.project_storage import ProjectStorage


ProcessState = Dict[str, Dict[str, Dict[str, bool]]]


def iter_units(state: ProcessState) -> Iterator[Tuple[str, str, str]]:
    """Yield (page_id, segment_id, line_segment_id) in map order."""
    for page_id, segments in state.items():
        for segment_id, line_segments in segments.items():
            for line_segment_id in line_segments:
                yield page_id, segment_id, line_segment_id


class WorkInventory:
    def __init__(self, storage: ProjectStorage):
        self.storage = storage

    @property
    def image_extension(self) -> str:
        return self.storage.config.image_extension

    def initialize(self, page_ids: Iterable[str]) -> ProcessState:
        """Scan the segment directories of the given pages.

        Only immediate children are inspected: segment directories below the
        page directory, line images directly inside each segment directory.
        Raises InventoryError if a directory cannot be listed.
        """
        state: ProcessState = {}

        for page_id in sorted(set(page_ids)):
            page_path = self.storage.page_path(page_id)
            segments: Dict[str, Dict[str, bool]] = {}

            for segment_dir in self._list_dir(page_path):
                if not segment_dir.is_dir():
                    continue
                segments[segment_dir.name] = self._scan_segment(segment_dir)

            state[page_id] = dict(sorted(segments.items()))

        return state

    def _scan_segment(self, segment_dir: Path) -> Dict[str, bool]:
        line_segments = {}
        for entry in self._list_dir(segment_dir):
            if not entry.is_file() or not entry.name.endswith(self.image_extension):
                continue
            line_segments[self.line_segment_id(entry.name)] = False
        return dict(sorted(line_segments.items()))

    def line_segment_id(self, filename: str) -> str:
        # Line images carry two suffixes (".bin.png" | ".nrm.png"), both are removed
        return filename[:-len(self.image_extension)]

    def _list_dir(self, path: Path) -> List[Path]:
        try:
            return list(path.iterdir())
        except OSError as e:
            raise InventoryError(f"Cannot list {path}: {e.strerror or e}", path=str(path)) from e

    def flatten_to_input_paths(self, state: ProcessState) -> List[str]:
        """Absolute line image paths for every unit in the state, in map order."""
        return [
            str(self.storage.input_path(page_id, segment_id, line_segment_id))
            for page_id, segment_id, line_segment_id in iter_units(state)
        ]
