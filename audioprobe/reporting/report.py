"""JSON and plain-text renderers for a batch summary."""

import json
from typing import Any, Dict, List
from audioprobe.domain.models import AudioRecord, BatchSummary

KB = 1024
MB = KB * 1024
GB = MB * 1024


def format_bytes(size: int) -> str:
    if size >= GB:
        return f"{size / GB:.2f} GB"
    if size >= MB:
        return f"{size / MB:.2f} MB"
    if size >= KB:
        return f"{size / KB:.2f} KB"
    return f"{size} bytes"


def format_duration(seconds: float) -> str:
    whole = int(seconds)
    hours = whole // 3600
    minutes = (whole % 3600) // 60
    secs = whole % 60
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{seconds:.1f}s"


def format_bitrate(bit_rate: int) -> str:
    if bit_rate >= 1_000_000:
        return f"{bit_rate / 1_000_000:.1f} Mbps"
    if bit_rate >= 1_000:
        return f"{bit_rate // 1_000} kbps"
    if bit_rate > 0:
        return f"{bit_rate} bps"
    return "N/A"


def build_json_document(summary: BatchSummary) -> Dict[str, Any]:
    return {
        "summary": summary.statistics.model_dump(mode="json"),
        "successful_files": [record.model_dump(mode="json") for record in summary.successes],
        "errors": [str(failure) for failure in summary.failures],
    }


def render_json(summary: BatchSummary, indent: int = 2) -> str:
    return json.dumps(build_json_document(summary), indent=indent, ensure_ascii=False)


def load_records(document: str) -> List[AudioRecord]:
    """Parses `successful_files` of a JSON report back into AudioRecords."""
    data = json.loads(document)
    return [AudioRecord.model_validate(entry) for entry in data.get("successful_files", [])]


def render_text(summary: BatchSummary) -> str:
    stats = summary.statistics
    lines = [
        "=== Audio File Analysis ===",
        f"Processing time: {stats.processing_time_seconds:.2f}s",
        f"Successful: {stats.successful}, Failed: {stats.failed}",
        f"Total duration: {format_duration(stats.total_duration_seconds)}",
        f"Total size: {format_bytes(stats.total_size_bytes)}",
        "",
    ]

    for record in summary.successes:
        lines.append(f"File: {record.file_path}")
        lines.append(f"   Size: {format_bytes(record.file_size)}")
        lines.append(f"   Duration: {format_duration(record.duration_seconds)}")
        lines.append(f"   Bit rate: {format_bitrate(record.bit_rate)}")
        lines.append(f"   Sample rate: {record.sample_rate} Hz")
        lines.append(f"   Channels: {record.channels}")
        lines.append(f"   Codec: {record.codec_name} ({record.codec_long_name})")
        lines.append(f"   Format: {record.format_name} ({record.format_long_name})")
        lines.append(f"   Contains video: {'yes' if record.has_video else 'no'}")
        lines.append(f"   Processing time: {record.processing_time_ms}ms")
        tags = [(key, value) for key, value in sorted(record.metadata.items()) if value]
        if tags:
            lines.append("   Tags:")
            for key, value in tags:
                lines.append(f"     {key}: {value}")
        lines.append("")

    if summary.failures:
        lines.append("=== Errors ===")
        for failure in summary.failures:
            lines.append(f"x {failure}")

    return "\n".join(lines) + "\n"
