from pathlib import Path
from typing import Any, Dict, Iterable, List

from infra.pipeline.errors import InventoryError
from infra.pipeline.storage.project_storage import ProjectStorage


class CleanupManager:
    """Removal and detection of recognition outputs left by a previous run."""

    def __init__(self, storage: ProjectStorage):
        self.storage = storage

    @property
    def logger(self):
        return self.storage.logger("recognition")

    @property
    def output_extension(self) -> str:
        return self.storage.config.output_extension

    def _list_dir(self, path: Path) -> List[Path]:
        try:
            return sorted(path.iterdir())
        except OSError as e:
            raise InventoryError(f"Cannot list {path}: {e.strerror or e}", path=str(path)) from e

    def _segment_dirs(self, page_path: Path) -> List[Path]:
        return [item for item in self._list_dir(page_path) if item.is_dir()]

    def _output_files(self, segment_dir: Path) -> List[Path]:
        return [
            item for item in self._list_dir(segment_dir)
            if item.is_file() and item.name.endswith(self.output_extension)
        ]

    def delete_old_outputs(self, page_ids: Iterable[str]) -> Dict[str, Any]:
        """Delete output artifacts in the segment directories of the given pages.

        A missing page directory skips that page only. Failed deletions are
        logged and reported, they never abort the pass.
        """
        deleted = []
        failed = []

        for page_id in page_ids:
            page_path = self.storage.page_path(page_id)
            if not page_path.is_dir():
                self.logger.debug("Page directory missing, skipping cleanup", page=page_id)
                continue

            for segment_dir in self._segment_dirs(page_path):
                for output_file in self._output_files(segment_dir):
                    try:
                        output_file.unlink()
                        deleted.append(str(output_file))
                    except OSError as e:
                        self.logger.warning(
                            f"Could not delete {output_file}",
                            page=page_id,
                            error=str(e)
                        )
                        failed.append(str(output_file))

        if deleted or failed:
            self.logger.info(
                f"Deleted {len(deleted)} old recognition outputs",
                units=len(deleted)
            )

        return {"deleted_count": len(deleted), "deleted": deleted, "failed": failed}

    def outputs_exist(self, page_ids: Iterable[str]) -> bool:
        """True as soon as one segment directory of the given pages holds an output."""
        for page_id in page_ids:
            page_path = self.storage.page_path(page_id)
            if not page_path.is_dir():
                continue

            for segment_dir in self._segment_dirs(page_path):
                if self._output_files(segment_dir):
                    return True

        return False
