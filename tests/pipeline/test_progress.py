"""
Tests for pipeline/recognition/progress.py

Key behaviors to verify:
1. A unit is done once its output file exists
2. Done flags are sticky: deleting the output later does not undo them
3. Percent is floor(done * 100 / total); no units means 100
"""

import pytest

from pipeline.recognition.inventory import WorkInventory, iter_units
from pipeline.recognition.progress import ProgressTracker


def create_output(storage, page_id, segment_id, unit):
    path = storage.output_path(page_id, segment_id, unit)
    path.write_text("recognized")
    return path


@pytest.fixture
def tracker(project_storage):
    state = WorkInventory(project_storage).initialize(["0001", "0002"])
    return ProgressTracker(project_storage, state)


class TestPercent:

    @pytest.mark.parametrize("done,total,expected", [
        (0, 4, 0),
        (1, 4, 25),
        (2, 4, 50),
        (4, 4, 100),
        (1, 3, 33),
        (2, 3, 66),
        (299, 300, 99),
        (0, 0, 100),
    ])
    def test_floor_percent(self, done, total, expected):
        assert ProgressTracker.percent(done, total) == expected


class TestPoll:

    def test_nothing_done(self, tracker):
        assert tracker.poll() == 0
        assert tracker.counts() == (0, 4)

    def test_partial_progress(self, tracker, project_storage):
        create_output(project_storage, "0001", "0001__000__paragraph", "0001__000__paragraph__000")
        create_output(project_storage, "0002", "0002__001__heading", "0002__001__heading__000")

        assert tracker.poll() == 50
        assert tracker.state["0001"]["0001__000__paragraph"]["0001__000__paragraph__000"] is True
        assert tracker.state["0001"]["0001__000__paragraph"]["0001__000__paragraph__001"] is False

    def test_flags_are_sticky(self, tracker, project_storage):
        output = create_output(project_storage, "0001", "0001__000__paragraph", "0001__000__paragraph__000")
        assert tracker.poll() == 25

        output.unlink()
        assert tracker.poll() == 25

    def test_all_done(self, tracker, project_storage):
        for page_id, segment_id, unit in list(iter_units(tracker.state)):
            create_output(project_storage, page_id, segment_id, unit)

        assert tracker.poll() == 100
        assert tracker.counts() == (4, 4)

    def test_empty_state_is_complete(self, project_storage):
        assert ProgressTracker(project_storage).poll() == 100

        empty_page = WorkInventory(project_storage).initialize(["0003"])
        assert ProgressTracker(project_storage, empty_page).poll() == 100


class TestStateManagement:

    def test_reset_replaces_state(self, tracker, project_storage):
        create_output(project_storage, "0001", "0001__000__paragraph", "0001__000__paragraph__000")
        tracker.poll()

        tracker.reset(WorkInventory(project_storage).initialize(["0002"]))

        assert tracker.counts() == (0, 2)

    def test_counts_do_not_touch_filesystem(self, tracker, project_storage):
        create_output(project_storage, "0001", "0001__000__paragraph", "0001__000__paragraph__000")

        assert tracker.counts() == (0, 4)
        tracker.poll()
        assert tracker.counts() == (1, 4)

