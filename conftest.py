"""
Pytest configuration for project root.

Ensures project modules can be imported in tests.
Provides global fixtures for a small recognition project on disk.
"""

import stat
import sys
import pytest
from pathlib import Path
from PIL import Image

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))


# ============================================================================
# PROJECT FIXTURES - Built in tmp_path for every test
# ============================================================================

PAGE_SEGMENTS = {
    "0001": {"0001__000__paragraph": 2},
    "0002": {"0002__000__paragraph": 1, "0002__001__heading": 1},
}

# Line recognizer stand-in: writes "<unit>.txt" next to every line image
# argument, echoes the image path, exits with 3 on --fail and blocks on --hang.
FAKE_RECOGNIZER = """#!/bin/sh
status=0
for arg in "$@"; do
  case "$arg" in
    --fail) status=3 ;;
    --hang) exec sleep 30 ;;
  esac
done
for arg in "$@"; do
  case "$arg" in
    *.png)
      unit="${arg%.bin.png}"
      unit="${unit%.nrm.png}"
      echo "recognized text" > "$unit.txt"
      echo "$arg"
      ;;
  esac
done
echo "finished" >&2
exit $status
"""


def _line_image(path: Path):
    img = Image.new('L', (120, 24), color=255)
    img.save(path, format='PNG')


@pytest.fixture
def tmp_projects(tmp_path):
    """Create a temporary projects root directory."""
    projects_root = tmp_path / "projects"
    projects_root.mkdir()
    return projects_root


@pytest.fixture
def tmp_project(tmp_projects):
    """Create a project with two pages of binarized and gray line images.

    processing/
        0001/0001__000__paragraph/0001__000__paragraph__000.bin.png (+ .nrm.png)
        0001/0001__000__paragraph/0001__000__paragraph__001.bin.png (+ .nrm.png)
        0002/0002__000__paragraph/0002__000__paragraph__000.bin.png (+ .nrm.png)
        0002/0002__001__heading/0002__001__heading__000.bin.png (+ .nrm.png)
        0003/                                       (page without segments)
        notes.txt                                   (not a page)
    """
    project_dir = tmp_projects / "test-project"
    page_root = project_dir / "processing"

    for page_id, segments in PAGE_SEGMENTS.items():
        for segment_id, line_count in segments.items():
            segment_dir = page_root / page_id / segment_id
            segment_dir.mkdir(parents=True)
            for i in range(line_count):
                unit = f"{segment_id}__{i:03d}"
                _line_image(segment_dir / f"{unit}.bin.png")
                _line_image(segment_dir / f"{unit}.nrm.png")
            # Page-level image next to the segments, never a line unit
            (segment_dir / "segment.png").write_bytes(b"")

    (page_root / "0003").mkdir()
    (page_root / "notes.txt").write_text("not a page")

    return project_dir


@pytest.fixture
def fake_recognizer(tmp_path):
    """Executable shell script standing in for ocropus-rpred."""
    if sys.platform == "win32":
        pytest.skip("fake recognizer is a POSIX shell script")

    script = tmp_path / "bin" / "fake-rpred"
    script.parent.mkdir()
    script.write_text(FAKE_RECOGNIZER)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def project_storage(tmp_project, tmp_projects):
    """Create a ProjectStorage instance for the temp project."""
    from infra.pipeline.storage.project_storage import ProjectStorage
    storage = ProjectStorage("test-project", projects_root=tmp_projects)
    yield storage
    storage.close()


@pytest.fixture
def make_storage(tmp_project, tmp_projects):
    """Factory for ProjectStorage instances with a config override."""
    from infra.pipeline.storage.project_storage import ProjectStorage
    created = []

    def factory(config=None):
        storage = ProjectStorage("test-project", projects_root=tmp_projects, config=config)
        created.append(storage)
        return storage

    yield factory

    for storage in created:
        storage.close()

