"""
Tests for infra/pipeline/process.py

Key behaviors to verify:
1. Blocking and background execution return the exit code
2. Console output is captured only when requested
3. Launch errors become ProcessLaunchFailure
4. stop_process() terminates a running process without waiting
"""

import sys
import time

import pytest

from infra.pipeline.errors import ProcessLaunchFailure, RecognitionError
from infra.pipeline.process import ProcessHandler

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX shell scripts")


def _script(tmp_path, name, body, executable=True):
    path = tmp_path / name
    path.write_text("#!/bin/sh\n" + body)
    if executable:
        path.chmod(0o755)
    return path


class TestStartProcess:

    def test_blocking_returns_exit_code(self, tmp_path):
        script = _script(tmp_path, "ok.sh", "exit 0\n")
        handler = ProcessHandler()

        assert handler.start_process(str(script), []) == 0
        assert handler.program == str(script)
        assert handler.returncode == 0
        assert not handler.is_alive()

    def test_non_zero_exit_code(self, tmp_path):
        script = _script(tmp_path, "fail.sh", "exit 7\n")
        handler = ProcessHandler()

        assert handler.start_process(str(script), []) == 7

    def test_background_returns_none_then_wait(self, tmp_path):
        script = _script(tmp_path, "ok.sh", "exit 2\n")
        handler = ProcessHandler()

        assert handler.start_process(str(script), [], run_in_background=True) is None
        assert handler.wait() == 2

    def test_arguments_passed_without_shell(self, tmp_path):
        script = _script(tmp_path, "echo.sh", 'for a in "$@"; do echo "$a"; done\n')
        handler = ProcessHandler(fetch_process_console=True)

        handler.start_process(str(script), ["a b", "$HOME", "-Q", "4"])

        assert handler.console_output.splitlines() == ["a b", "$HOME", "-Q", "4"]

    def test_handler_runs_one_process(self, tmp_path):
        script = _script(tmp_path, "ok.sh", "exit 0\n")
        handler = ProcessHandler()
        handler.start_process(str(script), [])

        with pytest.raises(RuntimeError):
            handler.start_process(str(script), [])

    def test_wait_without_process(self):
        assert ProcessHandler().wait() is None
        assert ProcessHandler().returncode is None


class TestConsoleCapture:

    def test_stdout_and_stderr_captured(self, fake_recognizer, tmp_path):
        image = tmp_path / "line.bin.png"
        image.write_bytes(b"")
        handler = ProcessHandler(fetch_process_console=True)

        handler.start_process(str(fake_recognizer), [str(image)])

        assert str(image) in handler.console_output
        assert handler.console_error == "finished\n"

    def test_console_not_captured_by_default(self, fake_recognizer):
        handler = ProcessHandler()
        handler.start_process(str(fake_recognizer), [])

        assert handler.console_output == ""
        assert handler.console_error == ""


class TestLaunchFailure:

    def test_missing_executable(self, tmp_path):
        handler = ProcessHandler()
        missing = str(tmp_path / "does-not-exist")

        with pytest.raises(ProcessLaunchFailure) as exc_info:
            handler.start_process(missing, [])

        assert exc_info.value.program == missing
        assert isinstance(exc_info.value, RecognitionError)
        assert missing in str(exc_info.value)

    def test_not_executable(self, tmp_path):
        script = _script(tmp_path, "plain.sh", "exit 0\n", executable=False)

        with pytest.raises(ProcessLaunchFailure):
            ProcessHandler().start_process(str(script), [])


class TestStopProcess:

    def test_stop_terminates_running_process(self, fake_recognizer):
        handler = ProcessHandler(fetch_process_console=True)
        handler.start_process(str(fake_recognizer), ["--hang"], run_in_background=True)
        assert handler.is_alive()

        started = time.time()
        handler.stop_process()
        returncode = handler.wait(timeout=10)

        assert handler.stop_requested
        assert returncode != 0
        assert time.time() - started < 10

    def test_stop_before_start_is_safe(self):
        handler = ProcessHandler()
        handler.stop_process()
        assert handler.stop_requested

    def test_stop_after_exit_is_safe(self, fake_recognizer):
        handler = ProcessHandler()
        handler.start_process(str(fake_recognizer), [])
        handler.stop_process()
        assert handler.returncode == 0
