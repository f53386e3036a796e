"""
Shared fixtures for recognition pipeline tests.

The controller accepts a process handler factory; FakeProcessHandler stands
in for ProcessHandler so tests decide when the "process" exits and can
write outputs while the run is in flight.
"""

import threading

import pytest


class FakeProcessHandler:
    def __init__(self, fetch_process_console=False):
        self.fetch_process_console = fetch_process_console
        self.program = None
        self.args = None
        self.stop_requested = False
        self.console_output = ""
        self.console_error = ""

        self.started = threading.Event()
        self._exited = threading.Event()
        self._returncode = None

    def start_process(self, program, args, run_in_background=False):
        self.program = program
        self.args = list(args)
        self.started.set()
        if run_in_background:
            return None
        return self.wait()

    def wait(self, timeout=None):
        self._exited.wait(timeout)
        return self._returncode

    def finish(self, returncode=0):
        """Let the fake process exit."""
        self._returncode = returncode
        self._exited.set()

    def stop_process(self):
        self.stop_requested = True
        if not self._exited.is_set():
            self.finish(-15)


class FakeHandlerFactory:
    def __init__(self):
        self.handlers = []

    def __call__(self, fetch_process_console=False):
        handler = FakeProcessHandler(fetch_process_console)
        self.handlers.append(handler)
        return handler

    @property
    def last(self):
        return self.handlers[-1]


class BackgroundRun:
    """controller.start() on a thread, capturing its result or exception."""

    def __init__(self, controller, page_ids, tool_args=None):
        self.result = None
        self.error = None
        self._thread = threading.Thread(
            target=self._run,
            args=(controller, page_ids, tool_args),
            daemon=True,
        )
        self._thread.start()

    def _run(self, controller, page_ids, tool_args):
        try:
            self.result = controller.start(page_ids, tool_args)
        except Exception as e:
            self.error = e

    def join(self, timeout=10):
        self._thread.join(timeout)
        assert not self._thread.is_alive(), "controller.start() did not return"
        return self


@pytest.fixture
def handler_factory():
    return FakeHandlerFactory()


@pytest.fixture
def run_in_background():
    return BackgroundRun
