"""Batch scheduler fanning probe targets out over a thread pool.

Every target is resolved in its own task behind the AdmissionGate, so at most
`gate.limit` resolutions are in flight. The coordinating thread (the caller of
`run`) collects each finished future and owns the outcome list; worker tasks
never touch shared collections.

Key properties:
- One outcome per submitted target, in completion order
- A failing task becomes a PROCESSING_ERROR failure; the batch never aborts
- Progress events are published from the coordinating thread, best-effort
- No cancellation and no per-file timeout
"""

import concurrent.futures
import logging
import threading
from collections import deque
from pathlib import Path
from typing import Dict, Optional, Sequence
from audioprobe.domain.events import BatchFinished, BatchStarted, Event, FileProbed
from audioprobe.domain.models import AudioRecord, FailureKind, ProbeFailure
from audioprobe.domain.result import BatchOutcome, Result
from audioprobe.infrastructure.event_bus import EventBus
from audioprobe.pipeline.admission import AdmissionGate
from audioprobe.pipeline.resolver import MetadataResolver


class BatchScheduler:
    """Runs MetadataResolver over many targets with bounded concurrency.

    Uses a "submit-on-demand" loop: only `gate.limit` futures
    are queued on the executor at once and new ones are submitted as old ones
    complete, so very large batches do not queue thousands of futures.

    Args:
        resolver: Resolver invoked once per target.
        gate: AdmissionGate bounding concurrent resolutions.
        event_bus: Optional bus receiving BatchStarted/FileProbed/BatchFinished.
    """

    def __init__(
        self,
        resolver: MetadataResolver,
        gate: AdmissionGate,
        event_bus: Optional[EventBus] = None,
    ):
        self.resolver = resolver
        self.gate = gate
        self.event_bus = event_bus
        self.logger = logging.getLogger(__name__)

        self._completed = 0
        self._progress_lock = threading.Lock()

    @property
    def completed(self) -> int:
        with self._progress_lock:
            return self._completed

    def _advance_progress(self) -> int:
        with self._progress_lock:
            self._completed += 1
            return self._completed

    def _publish(self, event: Event):
        if self.event_bus is None:
            return
        try:
            self.event_bus.publish(event)
        except Exception as e:
            self.logger.debug(f"Progress event dropped ({type(event).__name__}): {e}")

    def _resolve_one(self, path: Path) -> Result[AudioRecord, ProbeFailure]:
        with self.gate.permit():
            return self.resolver.resolve(path)

    def run(self, targets: Sequence[Path]) -> BatchOutcome:
        total = len(targets)
        outcome: BatchOutcome = []
        with self._progress_lock:
            self._completed = 0
        self.logger.info(
            f"Processing {total} files with max {self.gate.limit} concurrent operations"
        )
        self._publish(BatchStarted(total=total, max_concurrent=self.gate.limit))

        if total == 0:
            self._publish(BatchFinished(completed=0))
            return outcome

        pending = deque(Path(t) for t in targets)
        in_flight: Dict[concurrent.futures.Future, Path] = {}
        max_workers = min(total, self.gate.limit)

        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            def submit_batch():
                while len(in_flight) < self.gate.limit and pending:
                    path = pending.popleft()
                    future = executor.submit(self._resolve_one, path)
                    in_flight[future] = path

            submit_batch()

            while in_flight:
                done, _ = concurrent.futures.wait(
                    set(in_flight.keys()),
                    return_when=concurrent.futures.FIRST_COMPLETED
                )

                for future in done:
                    path = in_flight.pop(future)
                    try:
                        result = future.result()
                    except Exception as e:
                        self.logger.error(f"Unexpected failure probing {path}: {e}")
                        result = Result.Err(ProbeFailure(
                            path=path,
                            kind=FailureKind.PROCESSING_ERROR,
                            message=str(e),
                        ))
                    outcome.append(result)
                    count = self._advance_progress()
                    self._publish(FileProbed(completed=count, total=total, path=path, ok=result.ok))

                submit_batch()

        self._publish(BatchFinished(completed=len(outcome)))
        return outcome
