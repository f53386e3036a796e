"""
Tests for the linerec command line (cli/).

Commands run in-process through cli.main(argv) against a temporary
projects root selected with LINEREC_PROJECTS_ROOT.
"""

import json
import sys

import pytest

from cli import main, split_tool_args
from infra.config import ProjectConfigManager


@pytest.fixture(autouse=True)
def projects_root_env(tmp_projects, monkeypatch):
    monkeypatch.setenv("LINEREC_PROJECTS_ROOT", str(tmp_projects))


@pytest.fixture
def configured_project(tmp_project, fake_recognizer):
    ProjectConfigManager(tmp_project).set_value("recognizer.executable", str(fake_recognizer))
    return tmp_project


class TestSplitToolArgs:

    def test_no_separator(self):
        assert split_tool_args(["recognition", "p", "run"]) == (["recognition", "p", "run"], [])

    def test_separator(self):
        argv = ["recognition", "p", "run", "--pages", "0001", "--", "-Q", "4", "--", "x"]
        assert split_tool_args(argv) == (
            ["recognition", "p", "run", "--pages", "0001"],
            ["-Q", "4", "--", "x"],
        )


class TestConfigCommands:

    def test_init_show_set(self, tmp_project, capsys):
        main(["config", "test-project", "init", "--image-type", "Gray"])
        assert (tmp_project / "linerec.yaml").exists()

        main(["config", "test-project", "set", "recognizer.strict_exit_code", "false"])
        main(["config", "test-project", "show", "--json"])

        data = json.loads(capsys.readouterr().out.split("Current value: False\n", 1)[1])
        assert data["image_type"] == "Gray"
        assert data["recognizer"]["strict_exit_code"] is False
        assert data["resolved"]["image_extension"] == ".nrm.png"

    def test_init_refuses_overwrite(self, tmp_project, capsys):
        main(["config", "test-project", "init"])
        main(["config", "test-project", "init"])

        assert "already exists" in capsys.readouterr().out

    def test_set_invalid_value(self, tmp_project, capsys):
        main(["config", "test-project", "set", "image_type", "Color"])

        assert "Failed to set image_type" in capsys.readouterr().out
        assert not (tmp_project / "linerec.yaml").exists()

    def test_set_extension_stays_string(self, tmp_project):
        main(["config", "test-project", "set", "output_extension", ".txt"])
        assert ProjectConfigManager(tmp_project).load().output_extension == ".txt"


class TestRecognitionCommands:

    def test_pages(self, tmp_project, capsys):
        main(["recognition", "test-project", "pages", "--json"])

        rows = json.loads(capsys.readouterr().out)
        assert rows == [
            {"page_id": "0001", "segments": 1, "lines": 2},
            {"page_id": "0002", "segments": 2, "lines": 2},
            {"page_id": "0003", "segments": 0, "lines": 0},
        ]

    def test_unknown_project(self, tmp_projects):
        with pytest.raises(SystemExit) as exc_info:
            main(["recognition", "nope", "pages"])
        assert exc_info.value.code == 1

    def test_unknown_page(self, tmp_project):
        with pytest.raises(SystemExit):
            main(["recognition", "test-project", "exists", "--pages", "9999"])

    def test_tool_args_rejected_outside_run(self, tmp_project):
        with pytest.raises(SystemExit) as exc_info:
            main(["recognition", "test-project", "pages", "--", "-Q", "4"])
        assert exc_info.value.code == 2

    @pytest.mark.skipif(sys.platform == "win32", reason="uses a POSIX shell script recognizer")
    def test_run_exists_clean(self, configured_project, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["recognition", "test-project", "exists", "--pages", "0001"])
        assert exc_info.value.code == 1

        main(["recognition", "test-project", "run", "--pages", "0001", "0002", "--poll-interval", "0.05"])
        assert "Recognition complete: 4/4" in capsys.readouterr().out

        main(["recognition", "test-project", "exists", "--all"])

        # Second run refuses to overwrite
        with pytest.raises(SystemExit):
            main(["recognition", "test-project", "run", "--pages", "0001"])
        assert "--overwrite" in capsys.readouterr().out

        main(["recognition", "test-project", "clean", "--pages", "0001", "0002", "-y"])
        assert "Deleted 4 outputs" in capsys.readouterr().out

    @pytest.mark.skipif(sys.platform == "win32", reason="uses a POSIX shell script recognizer")
    def test_run_failure_exit_code(self, configured_project, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["recognition", "test-project", "run", "--pages", "0002", "--", "--fail"])

        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert "exited with code 3" in out
        assert "finished" in out
