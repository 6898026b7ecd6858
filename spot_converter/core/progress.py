"""
Rich progress bar shown while tracks are matched against YouTube Music.

Usage:
    from spot_converter.core.progress import MatchingProgressBar

    with MatchingProgressBar(total=len(tracks)) as progress:
        report = orchestrator.convert(tracks, progress_bar=progress)

The bar line looks like:

    Matching        ✓ 45  ✗ 2               ━━━━━━━━━━━━━━━━━  47%

log() prints above the bar, so per-track messages never tear it.
"""

from typing import Optional

from rich import get_console
from rich.console import JustifyMethod, OverflowMethod
from rich.progress import BarColumn, Progress, ProgressColumn, Task, TaskID
from rich.style import StyleType
from rich.text import Text
from rich.theme import Theme


PROGRESS_THEME = Theme({
    "bar.back": "grey23",
    "bar.complete": "rgb(165,66,129)",
    "bar.finished": "rgb(114,156,31)",
    "bar.pulse": "rgb(165,66,129)",
    "progress.percentage": "white",
})


class SizedTextColumn(ProgressColumn):
    """Text column truncated (and padded) to a fixed width."""

    def __init__(
        self,
        text_format: str,
        style: StyleType = "none",
        justify: JustifyMethod = "left",
        overflow: Optional[OverflowMethod] = None,
        width: int = 20,
    ) -> None:
        self.text_format = text_format
        self.style = style
        self.justify: JustifyMethod = justify
        self.overflow: Optional[OverflowMethod] = overflow
        self.width = width
        super().__init__()

    def render(self, task: Task) -> Text:
        text = Text.from_markup(
            self.text_format.format(task=task),
            style=self.style,
            justify=self.justify,
        )
        text.truncate(max_width=self.width, overflow=self.overflow, pad=True)
        return text


class MatchingProgressBar:
    """
    Progress bar counting matched and unmatched tracks.

    Attributes:
        total: Number of tracks in the conversion.
        completed: Tracks processed so far.
        matched: Tracks that received a YouTube video ID.
        failed: Tracks left unmatched.

    update() is called from the thread that collects results, never from
    worker threads.
    """

    def __init__(self, total: int, description: str = "Matching") -> None:
        self.total = total
        self.description = description
        self.completed = 0
        self.matched = 0
        self.failed = 0

        self.console = get_console()
        self.console.push_theme(PROGRESS_THEME)

        self.progress = Progress(
            SizedTextColumn("[white]{task.description}", overflow="ellipsis", width=15),
            SizedTextColumn("{task.fields[status]}", style="white", width=30),
            BarColumn(bar_width=40, finished_style="green"),
            "[progress.percentage]{task.percentage:>3.0f}%",
            console=self.console,
            transient=False,
            refresh_per_second=10,
        )

        self.task_id: Optional[TaskID] = None
        self._started = False

    def __enter__(self) -> "MatchingProgressBar":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    def start(self) -> None:
        if not self._started:
            self.progress.start()
            self.task_id = self.progress.add_task(
                description=self.description,
                total=self.total,
                status=self._status_text(),
            )
            self._started = True

    def stop(self) -> None:
        if self._started:
            self.progress.stop()
            self._started = False

    def log(self, message: str) -> None:
        """Print a message above the progress bar."""
        self.progress.console.print(message, highlight=False)

    def update(self, matched: bool) -> None:
        """Count one more processed track."""
        self.completed += 1
        if matched:
            self.matched += 1
        else:
            self.failed += 1

        if self.task_id is not None:
            self.progress.update(
                self.task_id,
                completed=self.completed,
                status=self._status_text(),
            )

    def _status_text(self) -> str:
        return f"[green]✓ {self.matched}[/green]  [red]✗ {self.failed}[/red]"


__all__ = ["PROGRESS_THEME", "SizedTextColumn", "MatchingProgressBar"]
