from typing import Optional
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from audioprobe.domain.events import BatchFinished, BatchStarted, DiscoveryFinished, FileProbed
from audioprobe.infrastructure.event_bus import EventBus


class ProgressDisplay:
    """Subscribes to batch events and drives a rich progress bar on stderr."""

    def __init__(self, bus: EventBus, console: Optional[Console] = None, enabled: bool = True):
        self.bus = bus
        self.enabled = enabled
        self.console = console or Console(stderr=True)
        self.progress: Optional[Progress] = None
        self.task_id: Optional[TaskID] = None
        self.failed = 0
        self.files_found = 0
        self._setup_subscriptions()

    def _setup_subscriptions(self):
        self.bus.subscribe(DiscoveryFinished, self.on_discovery_finished)
        self.bus.subscribe(BatchStarted, self.on_batch_started)
        self.bus.subscribe(FileProbed, self.on_file_probed)
        self.bus.subscribe(BatchFinished, self.on_batch_finished)

    def on_discovery_finished(self, event: DiscoveryFinished):
        self.files_found = event.files_found
        if not self.enabled or event.files_found == 0:
            return
        skipped = len(event.missing_paths) + len(event.failed_roots)
        line = f"Found {event.files_found} audio files"
        if skipped:
            line += f" ({skipped} input paths skipped)"
        self.console.print(line)

    def on_batch_started(self, event: BatchStarted):
        if not self.enabled or event.total == 0:
            return
        self.progress = Progress(
            SpinnerColumn(),
            TimeElapsedColumn(),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}"),
            TimeRemainingColumn(),
            console=self.console,
            transient=False,
        )
        self.progress.start()
        self.task_id = self.progress.add_task("Probing", total=event.total)

    def on_file_probed(self, event: FileProbed):
        if not event.ok:
            self.failed += 1
        if self.progress is None or self.task_id is None:
            return
        self.progress.update(self.task_id, completed=event.completed)

    def on_batch_finished(self, event: BatchFinished):
        if self.progress is None:
            return
        if self.task_id is not None:
            self.progress.update(self.task_id, completed=event.completed, description="Complete!")
        self.progress.stop()
        self.progress = None
