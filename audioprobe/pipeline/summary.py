from typing import Iterable
from audioprobe.domain.models import BatchStatistics, BatchSummary
from audioprobe.domain.result import Result

def summarize(outcome: Iterable[Result], elapsed_seconds: float) -> BatchSummary:
    """Partitions a batch outcome and computes its statistics.

    `elapsed_seconds` is the wall time measured around the whole batch, not a
    sum of per-file times. Durations and sizes are summed over successes only.
    """
    summary = BatchSummary()
    for result in outcome:
        if result.ok:
            summary.successes.append(result.value)
        else:
            summary.failures.append(result.failure)

    summary.statistics = BatchStatistics(
        total_files=len(summary.successes) + len(summary.failures),
        successful=len(summary.successes),
        failed=len(summary.failures),
        processing_time_seconds=elapsed_seconds,
        total_duration_seconds=sum(r.duration_seconds for r in summary.successes),
        total_size_bytes=sum(r.file_size for r in summary.successes),
    )
    return summary
