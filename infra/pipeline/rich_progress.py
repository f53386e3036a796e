"""Rich-based progress bar for percent-complete polling.

The recognition job reports progress as an integer percentage, so the bar
always has a total of 100 and is updated with the latest polled value.
"""

from typing import Optional

from rich.console import Console
from rich.progress import (
    Progress,
    BarColumn,
    TextColumn,
    TaskProgressColumn,
    TimeElapsedColumn,
)


class RichProgressBar:
    def __init__(self, prefix: str = "", width: int = 40, console: Optional[Console] = None):
        self.prefix = prefix

        self._progress = Progress(
            TextColumn(f"{prefix}{{task.description}}"),
            BarColumn(bar_width=width),
            TaskProgressColumn(),
            TextColumn("•"),
            TimeElapsedColumn(),
            TextColumn("•"),
            TextColumn("{task.fields[suffix]}", justify="right"),
            console=console,
            transient=True,
        )

        self._task_id = None
        self._started = False

    def __enter__(self):
        self._progress.__enter__()
        self._task_id = self._progress.add_task("", total=100, suffix="")
        self._started = True
        return self

    def __exit__(self, *args):
        self._started = False
        return self._progress.__exit__(*args)

    def update(self, percent: int, suffix: str = ""):
        if not self._started:
            self.__enter__()

        # -1 means no progress known yet
        self._progress.update(
            self._task_id,
            completed=max(percent, 0),
            suffix=suffix
        )

    def finish(self, message: str = ""):
        if self._started:
            self.__exit__(None, None, None)

        # Progress bar is cleared due to transient=True
        if message:
            self._progress.console.print(message)
