import subprocess
import json
from pathlib import Path
from typing import Dict, Any, Optional
from audioprobe.domain.models import AudioRecord, FailureKind, ProbeFailure
from audioprobe.domain.result import Result

class FFprobeAdapter:
    """Wrapper around ffprobe to extract container and audio stream information."""

    def __init__(self, binary: str = "ffprobe"):
        self.binary = binary

    @staticmethod
    def _to_float(value: Any) -> float:
        try:
            return max(0.0, float(value))
        except (TypeError, ValueError):
            return 0.0

    @staticmethod
    def _to_int(value: Any) -> int:
        if value is None or isinstance(value, bool):
            return 0
        try:
            return max(0, int(str(value).strip()))
        except ValueError:
            return 0

    def is_available(self) -> bool:
        """Runs `ffprobe -version` and reports whether it succeeded."""
        try:
            result = subprocess.run([self.binary, "-version"], capture_output=True, text=True, errors="replace")
        except OSError:
            return False
        return result.returncode == 0

    def probe(self, file_path: Path) -> Result[AudioRecord, ProbeFailure]:
        """Executes ffprobe and parses its JSON output into an AudioRecord."""
        cmd = [
            self.binary,
            "-v", "quiet",
            "-print_format", "json",
            "-show_format",
            "-show_streams",
            str(file_path)
        ]

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, errors="replace")
        except OSError as e:
            return Result.Err(ProbeFailure(
                path=file_path,
                kind=FailureKind.TOOL_EXECUTION_ERROR,
                message=f"Failed to execute ffprobe: {e}",
            ))
        if result.returncode != 0:
            return Result.Err(ProbeFailure(
                path=file_path,
                kind=FailureKind.TOOL_EXECUTION_ERROR,
                message=f"FFprobe failed: {(result.stderr or '').strip()}",
            ))

        try:
            data = json.loads(result.stdout)
        except (TypeError, ValueError) as e:
            return Result.Err(ProbeFailure(
                path=file_path,
                kind=FailureKind.PROCESSING_ERROR,
                message=f"Failed to parse ffprobe output: {e}",
            ))
        return self.parse_output(file_path, data)

    def parse_output(self, file_path: Path, data: Any) -> Result[AudioRecord, ProbeFailure]:
        """Builds an AudioRecord from a decoded ffprobe document."""
        def malformed(reason: str) -> Result[AudioRecord, ProbeFailure]:
            return Result.Err(ProbeFailure(
                path=file_path,
                kind=FailureKind.PROCESSING_ERROR,
                message=f"Failed to parse ffprobe output: {reason}",
            ))

        if not isinstance(data, dict):
            return malformed("document is not an object")
        streams = data.get("streams")
        if not isinstance(streams, list):
            return malformed("missing streams array")

        record = AudioRecord(file_path=file_path)

        # Container info
        fmt: Optional[Dict[str, Any]] = data.get("format")
        if fmt is not None:
            if not isinstance(fmt, dict):
                return malformed("format is not an object")
            if "format_name" not in fmt or "format_long_name" not in fmt:
                return malformed("format without format_name/format_long_name")
            record.format_name = str(fmt["format_name"])
            record.format_long_name = str(fmt["format_long_name"])
            if fmt.get("duration") is not None:
                record.duration_seconds = self._to_float(fmt.get("duration"))
            if fmt.get("bit_rate") is not None:
                record.bit_rate = self._to_int(fmt.get("bit_rate"))
            tags = fmt.get("tags") or {}
            if not isinstance(tags, dict):
                return malformed("format tags is not an object")
            for key, value in tags.items():
                record.metadata[str(key).lower()] = "" if value is None else str(value)

        # First audio stream wins; any video stream only sets the flag
        audio_stream = None
        for stream in streams:
            if not isinstance(stream, dict) or "codec_type" not in stream:
                return malformed("stream without codec_type")
            codec_type = stream.get("codec_type")
            if codec_type == "audio" and audio_stream is None:
                audio_stream = stream
            elif codec_type == "video":
                record.has_video = True

        if audio_stream is not None:
            if audio_stream.get("codec_name") is not None:
                record.codec_name = str(audio_stream["codec_name"])
            if audio_stream.get("codec_long_name") is not None:
                record.codec_long_name = str(audio_stream["codec_long_name"])
            if audio_stream.get("sample_rate") is not None:
                record.sample_rate = self._to_int(audio_stream.get("sample_rate"))
            if audio_stream.get("channels") is not None:
                record.channels = self._to_int(audio_stream.get("channels"))

            # Container bit-rate takes priority; stream value only fills an unknown one
            stream_bit_rate = self._to_int(audio_stream.get("bit_rate"))
            if stream_bit_rate > 0 and record.bit_rate == 0:
                record.bit_rate = stream_bit_rate

        return Result.Ok(record)
