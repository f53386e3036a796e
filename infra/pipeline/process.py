"""External process execution for pipeline tools.

ProcessHandler wraps a single subprocess.Popen invocation:
- start_process() spawns the program without a shell and, unless asked to run
  in the background, blocks until it exits
- stop_process() requests termination and returns immediately
- stdout/stderr are collected line by line on reader threads so console
  output can be read while the process is still running

One handler drives one process. Create a fresh handler for every run.
"""

import subprocess
import threading
from typing import IO, List, Optional

from infra.pipeline.errors import ProcessLaunchFailure


class ProcessHandler:
    def __init__(self, fetch_process_console: bool = False):
        self.fetch_process_console = fetch_process_console

        self._process: Optional[subprocess.Popen] = None
        self._program: Optional[str] = None
        self._stop_requested = False
        self._lock = threading.Lock()

        self._stdout_lines: List[str] = []
        self._stderr_lines: List[str] = []
        self._readers: List[threading.Thread] = []

    @property
    def program(self) -> Optional[str]:
        return self._program

    @property
    def returncode(self) -> Optional[int]:
        if self._process is None:
            return None
        return self._process.poll()

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested

    def start_process(
        self,
        program: str,
        args: List[str],
        run_in_background: bool = False
    ) -> Optional[int]:
        """Spawn `program args...`.

        Returns the exit code, or None when run_in_background is set.
        Raises ProcessLaunchFailure if the program cannot be started.
        """
        with self._lock:
            if self._process is not None:
                raise RuntimeError("ProcessHandler already started a process; create a new handler")

            self._program = program
            pipe = subprocess.PIPE if self.fetch_process_console else subprocess.DEVNULL

            try:
                self._process = subprocess.Popen(
                    [program, *args],
                    stdout=pipe,
                    stderr=pipe,
                    stdin=subprocess.DEVNULL,
                    text=True,
                    bufsize=1,
                )
            except (FileNotFoundError, PermissionError) as e:
                raise ProcessLaunchFailure(program, e.strerror or str(e)) from e
            except OSError as e:
                raise ProcessLaunchFailure(program, str(e)) from e

            if self.fetch_process_console:
                self._readers = [
                    self._start_reader(self._process.stdout, self._stdout_lines),
                    self._start_reader(self._process.stderr, self._stderr_lines),
                ]

        if run_in_background:
            return None

        return self.wait()

    def _start_reader(self, stream: IO[str], sink: List[str]) -> threading.Thread:
        def pump():
            for line in stream:
                with self._lock:
                    sink.append(line)
            stream.close()

        thread = threading.Thread(target=pump, daemon=True)
        thread.start()
        return thread

    def wait(self, timeout: Optional[float] = None) -> Optional[int]:
        """Block until the process exits and console readers have drained."""
        if self._process is None:
            return None

        returncode = self._process.wait(timeout=timeout)
        for reader in self._readers:
            reader.join()
        return returncode

    def is_alive(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def stop_process(self) -> None:
        """Request termination. Does not wait for the process to exit."""
        with self._lock:
            self._stop_requested = True
            process = self._process

        if process is None or process.poll() is not None:
            return

        try:
            process.terminate()
        except ProcessLookupError:
            # Exited between poll() and terminate()
            pass

    @property
    def console_output(self) -> str:
        with self._lock:
            return "".join(self._stdout_lines)

    @property
    def console_error(self) -> str:
        with self._lock:
            return "".join(self._stderr_lines)
