import pytest
from pathlib import Path
from unittest.mock import MagicMock
from audioprobe.domain.events import BatchFinished, BatchStarted, FileProbed
from audioprobe.domain.models import AudioRecord, FailureKind, ProbeFailure
from audioprobe.domain.result import Result
from audioprobe.pipeline.admission import AdmissionGate
from audioprobe.pipeline.scheduler import BatchScheduler


def _fake_resolver():
    resolver = MagicMock()

    def resolve(path):
        if path.name.startswith("missing"):
            return Result.Err(ProbeFailure(path=path, kind=FailureKind.NOT_FOUND))
        return Result.Ok(AudioRecord(file_path=path, duration_seconds=1.0))

    resolver.resolve.side_effect = resolve
    return resolver


@pytest.mark.parametrize("limit", [1, 7, 17])
def test_one_outcome_per_target(limit):
    targets = [Path(f"/music/{i}.mp3") for i in range(7)]
    scheduler = BatchScheduler(_fake_resolver(), AdmissionGate(limit))

    outcome = scheduler.run(targets)

    assert len(outcome) == len(targets)
    assert sorted(r.value.file_path for r in outcome) == sorted(targets)
    assert scheduler.completed == len(targets)

def test_failures_are_collected_not_raised():
    targets = [Path("/music/a.mp3"), Path("/music/missing.mp3"), Path("/music/b.mp3")]
    scheduler = BatchScheduler(_fake_resolver(), AdmissionGate(2))

    outcome = scheduler.run(targets)

    failures = [r.failure for r in outcome if not r.ok]
    assert len(outcome) == 3
    assert len(failures) == 1
    assert failures[0].kind == FailureKind.NOT_FOUND

def test_unexpected_exception_becomes_processing_error():
    resolver = MagicMock()
    resolver.resolve.side_effect = [RuntimeError("kaboom")]
    scheduler = BatchScheduler(resolver, AdmissionGate(1))

    outcome = scheduler.run([Path("/music/a.mp3")])

    assert len(outcome) == 1
    assert not outcome[0].ok
    assert outcome[0].failure.kind == FailureKind.PROCESSING_ERROR
    assert "kaboom" in outcome[0].failure.message

def test_permits_returned_after_run():
    gate = AdmissionGate(3)
    resolver = MagicMock()
    resolver.resolve.side_effect = ValueError("bad")
    scheduler = BatchScheduler(resolver, gate)

    scheduler.run([Path(f"/x/{i}.mp3") for i in range(5)])

    assert gate.held == 0
    assert gate.available == 3

def test_empty_batch():
    bus = MagicMock()
    scheduler = BatchScheduler(_fake_resolver(), AdmissionGate(4), event_bus=bus)

    assert scheduler.run([]) == []
    event_types = [c[0][0].__class__ for c in bus.publish.call_args_list]
    assert event_types == [BatchStarted, BatchFinished]

def test_progress_events(event_bus):
    seen = []
    event_bus.subscribe(BatchStarted, seen.append)
    event_bus.subscribe(FileProbed, seen.append)
    event_bus.subscribe(BatchFinished, seen.append)
    targets = [Path("/m/a.mp3"), Path("/m/missing.mp3"), Path("/m/c.mp3")]
    scheduler = BatchScheduler(_fake_resolver(), AdmissionGate(2), event_bus=event_bus)

    scheduler.run(targets)

    assert isinstance(seen[0], BatchStarted)
    assert seen[0].total == 3
    assert seen[0].max_concurrent == 2
    probed = [e for e in seen if isinstance(e, FileProbed)]
    assert [e.completed for e in probed] == [1, 2, 3]
    assert all(e.total == 3 for e in probed)
    assert sum(1 for e in probed if not e.ok) == 1
    assert isinstance(seen[-1], BatchFinished)
    assert seen[-1].completed == 3

def test_broken_progress_subscriber_does_not_abort_batch(event_bus):
    def explode(_event):
        raise RuntimeError("display crashed")

    event_bus.subscribe(FileProbed, explode)
    scheduler = BatchScheduler(_fake_resolver(), AdmissionGate(2), event_bus=event_bus)

    outcome = scheduler.run([Path("/m/a.mp3"), Path("/m/b.mp3")])

    assert len(outcome) == 2
    assert all(r.ok for r in outcome)

def test_raising_event_bus_is_contained():
    bus = MagicMock()
    bus.publish.side_effect = RuntimeError("bus down")
    scheduler = BatchScheduler(_fake_resolver(), AdmissionGate(2), event_bus=bus)

    outcome = scheduler.run([Path("/m/a.mp3")])

    assert len(outcome) == 1

def test_reused_scheduler_restarts_progress(event_bus):
    probed = []
    event_bus.subscribe(FileProbed, probed.append)
    scheduler = BatchScheduler(_fake_resolver(), AdmissionGate(2), event_bus=event_bus)

    scheduler.run([Path("/m/a.mp3"), Path("/m/b.mp3")])
    probed.clear()
    scheduler.run([Path("/m/c.mp3"), Path("/m/d.mp3")])

    assert sorted((e.completed, e.total) for e in probed) == [(1, 2), (2, 2)]
    assert scheduler.completed == 2
