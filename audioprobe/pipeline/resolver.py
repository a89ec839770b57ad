"""Metadata resolution for a single probe target.

Resolution always prefers ffprobe and degrades to the extension estimation
table whenever the tool is unavailable or its output cannot be used. The only
failure that leaves this module is a missing file.
"""

import logging
import time
from pathlib import Path
from typing import Dict, Optional
from audioprobe.domain.models import AudioRecord, FailureKind, ProbeFailure
from audioprobe.domain.result import Result
from audioprobe.infrastructure.ffprobe import FFprobeAdapter
from audioprobe.pipeline.estimation import estimate_duration, estimate_format

DEFAULT_ARTIST = "Unknown Artist"
DEFAULT_ALBUM = "Unknown Album"


def apply_default_tags(tags: Dict[str, str], path: Path) -> Dict[str, str]:
    """Back-fills title/artist/album in place; present keys (even empty) are kept."""
    if "title" not in tags:
        tags["title"] = path.stem
    if "artist" not in tags:
        tags["artist"] = DEFAULT_ARTIST
    if "album" not in tags:
        tags["album"] = DEFAULT_ALBUM
    return tags


def estimate_record(path: Path, file_size: int) -> AudioRecord:
    """Builds a record from the extension table and the file size alone."""
    record = AudioRecord(file_path=path, file_size=file_size)
    estimate = estimate_format(path.suffix)
    bit_rate = None
    if estimate is not None:
        record.codec_name = estimate.codec_name
        record.codec_long_name = estimate.codec_long_name
        record.format_name = estimate.format_name
        record.format_long_name = estimate.format_long_name
        record.sample_rate = estimate.sample_rate
        record.channels = estimate.channels
        bit_rate = estimate.bit_rate
        record.bit_rate = bit_rate or 0
    record.duration_seconds = estimate_duration(file_size, bit_rate)
    return record


class MetadataResolver:
    """Resolves one path into an AudioRecord or a NOT_FOUND failure.

    Args:
        ffprobe_adapter: Adapter used for real probing; None forces estimation.
        use_ffprobe: Whether the tool is usable. When None, availability is
            checked once here (`ffprobe -version`) and reused for every call.
    """

    def __init__(self, ffprobe_adapter: Optional[FFprobeAdapter] = None, use_ffprobe: Optional[bool] = None):
        self.ffprobe_adapter = ffprobe_adapter
        self.logger = logging.getLogger(__name__)
        if ffprobe_adapter is None:
            self.use_ffprobe = False
        elif use_ffprobe is None:
            self.use_ffprobe = ffprobe_adapter.is_available()
        else:
            self.use_ffprobe = use_ffprobe

    def resolve(self, path: Path) -> Result[AudioRecord, ProbeFailure]:
        start_time = time.monotonic()
        path = Path(path)
        self.logger.debug(f"Analyzing file: {path}")

        if not path.exists():
            return Result.Err(ProbeFailure(path=path, kind=FailureKind.NOT_FOUND))

        try:
            file_size = path.stat().st_size
        except OSError as e:
            self.logger.debug(f"Cannot stat {path}, assuming size 0: {e}")
            file_size = 0

        tool_result = self._probe_with_tool(path)
        if tool_result.ok:
            record = tool_result.unwrap()
            record.file_size = file_size
        else:
            if tool_result.failure.kind != FailureKind.TOOL_UNAVAILABLE:
                self.logger.debug(f"FFprobe analysis failed for {path}, estimating: {tool_result.failure}")
            record = estimate_record(path, file_size)

        apply_default_tags(record.metadata, path)
        record.processing_time_ms = int((time.monotonic() - start_time) * 1000)
        return Result.Ok(record)

    def _probe_with_tool(self, path: Path) -> Result[AudioRecord, ProbeFailure]:
        if not self.use_ffprobe:
            return Result.Err(ProbeFailure(path=path, kind=FailureKind.TOOL_UNAVAILABLE))
        return self.ffprobe_adapter.probe(path)
