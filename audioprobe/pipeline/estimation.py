"""Extension-based format estimation used when ffprobe cannot be used.

All values here are assumptions, not measurements: the file content is never
read. The table is a pure lookup so the fallback path can be tested without
touching the filesystem.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict

DEFAULT_SAMPLE_RATE = 44100
DEFAULT_CHANNELS = 2
DEFAULT_BIT_RATE = 320000
PCM_BITS_PER_SAMPLE = 16
DEFAULT_DURATION_SECONDS = 300.0


class FormatEstimate(BaseModel):
    model_config = ConfigDict(frozen=True)

    codec_name: str
    codec_long_name: str
    format_name: str
    format_long_name: str
    sample_rate: int = DEFAULT_SAMPLE_RATE
    channels: int = DEFAULT_CHANNELS
    bit_rate: Optional[int] = None  # None for lossless formats without a fixed rate


def estimate_format(extension: str) -> Optional[FormatEstimate]:
    """Returns the assumed format for a file extension (with or without dot).

    Returns None for an empty extension. Unknown extensions get a generic
    "EXT audio" / "EXT format" estimate.
    """
    ext = extension.lstrip(".")
    if not ext:
        return None
    lower = ext.lower()

    if lower == "mp3":
        return FormatEstimate(
            codec_name=lower,
            codec_long_name="MP3 (MPEG audio layer 3)",
            format_name=lower,
            format_long_name="MP2/3 (MPEG audio layer 2/3)",
            bit_rate=DEFAULT_BIT_RATE,
        )
    if lower == "wav":
        return FormatEstimate(
            codec_name="pcm_s16le",
            codec_long_name="PCM signed 16-bit little-endian",
            format_name=lower,
            format_long_name="WAV / WAVE (Waveform Audio)",
            bit_rate=DEFAULT_SAMPLE_RATE * DEFAULT_CHANNELS * PCM_BITS_PER_SAMPLE,
        )
    if lower == "flac":
        return FormatEstimate(
            codec_name=lower,
            codec_long_name="FLAC (Free Lossless Audio Codec)",
            format_name=lower,
            format_long_name="raw FLAC",
        )
    return FormatEstimate(
        codec_name=lower,
        codec_long_name=f"{ext.upper()} audio",
        format_name=lower,
        format_long_name=f"{ext.upper()} format",
        bit_rate=DEFAULT_BIT_RATE,
    )


def estimate_duration(file_size: int, bit_rate: Optional[int]) -> float:
    """Duration in seconds from size and bit-rate, or the fixed default."""
    if bit_rate:
        return (file_size * 8) / bit_rate
    return DEFAULT_DURATION_SECONDS
