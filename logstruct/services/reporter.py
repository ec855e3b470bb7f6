"""
Progress reporting for long running phases (reading, squashing, print).

Purely observational: the reporter never influences mining results.
"""

from typing import Dict, Optional

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TaskID

from logstruct.protocols import ProgressSinkProtocol

__all__ = ['ProgressReporter']


class ProgressReporter(ProgressSinkProtocol):
    """
    Counts processed units per phase and shows them on stderr.

    A phase is identified by its label. When the label changes (or finish()
    is called) the previous phase is closed with a "<label>: <n> - done"
    line.
    """

    def __init__(self, enabled: bool = False, console: Optional[Console] = None,
                 refresh_every: int = 100):
        self.enabled = enabled
        self.console = console or Console(stderr=True)
        self.refresh_every = refresh_every
        self.label: Optional[str] = None
        self.count = 0
        self.counts: Dict[str, int] = {}
        self._progress: Optional[Progress] = None
        self._task: Optional[TaskID] = None

    def report(self, label: str) -> None:
        if not self.enabled:
            return
        if label != self.label:
            self._close_phase()
            self._open_phase(label)
        self.count += 1
        if self.count % self.refresh_every == 0:
            self._progress.update(self._task, completed=self.count)

    def finish(self) -> None:
        if not self.enabled:
            return
        self._close_phase()
        if self._progress is not None:
            self._progress.stop()
            self._progress = None

    def _open_phase(self, label: str) -> None:
        if self._progress is None:
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("{task.description}: {task.completed}"),
                console=self.console,
                transient=True,
                redirect_stdout=False,
                redirect_stderr=False,
            )
            self._progress.start()
        self.label = label
        self.count = 0
        self._task = self._progress.add_task(label, total=None)

    def _close_phase(self) -> None:
        if self.label is None:
            return
        self.counts[self.label] = self.counts.get(self.label, 0) + self.count
        self._progress.remove_task(self._task)
        self.console.print(f"{self.label}: {self.count} - done", markup=False, highlight=False)
        self.label = None
        self._task = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.finish()
        return False
