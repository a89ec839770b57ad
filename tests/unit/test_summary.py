from pathlib import Path
from audioprobe.domain.models import AudioRecord, FailureKind, ProbeFailure
from audioprobe.domain.result import Result
from audioprobe.pipeline.summary import summarize


def _ok(name, duration, size):
    return Result.Ok(AudioRecord(file_path=Path(name), duration_seconds=duration, file_size=size))

def _err(name):
    return Result.Err(ProbeFailure(path=Path(name), kind=FailureKind.NOT_FOUND))


def test_failures_never_contribute_to_totals():
    outcome = [
        _ok("a.mp3", 10.0, 100),
        _err("gone1.mp3"),
        _ok("b.mp3", 20.0, 200),
        _err("gone2.mp3"),
        _ok("c.mp3", 30.0, 300),
    ]

    summary = summarize(outcome, elapsed_seconds=2.5)
    stats = summary.statistics

    assert stats.total_files == 5
    assert stats.successful == 3
    assert stats.failed == 2
    assert stats.total_duration_seconds == 60.0
    assert stats.total_size_bytes == 600
    assert stats.processing_time_seconds == 2.5

def test_partitions_keep_insertion_order():
    outcome = [_ok("z.mp3", 1.0, 1), _err("y.mp3"), _ok("a.mp3", 1.0, 1), _err("b.mp3")]

    summary = summarize(outcome, 0.0)

    assert [r.file_path.name for r in summary.successes] == ["z.mp3", "a.mp3"]
    assert [f.path.name for f in summary.failures] == ["y.mp3", "b.mp3"]

def test_empty_outcome():
    summary = summarize([], 0.1)

    assert summary.successes == []
    assert summary.failures == []
    assert summary.statistics.total_files == 0
    assert summary.statistics.total_duration_seconds == 0.0
    assert summary.statistics.total_size_bytes == 0

def test_only_failures():
    summary = summarize([_err("x.mp3")], 1.0)

    assert summary.statistics.failed == 1
    assert summary.statistics.total_size_bytes == 0
