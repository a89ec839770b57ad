from enum import Enum
from pathlib import Path
from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field

class FailureKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_AUDIO_FILE = "INVALID_AUDIO_FILE"  # Reserved for content validation
    TOOL_UNAVAILABLE = "TOOL_UNAVAILABLE"
    TOOL_EXECUTION_ERROR = "TOOL_EXECUTION_ERROR"
    PROCESSING_ERROR = "PROCESSING_ERROR"

class AudioRecord(BaseModel):
    file_path: Path
    file_size: int = Field(default=0, ge=0)
    duration_seconds: float = Field(default=0.0, ge=0.0)
    bit_rate: int = Field(default=0, ge=0)  # 0 = unknown
    sample_rate: int = Field(default=0, ge=0)
    channels: int = Field(default=0, ge=0)
    codec_name: str = ""
    codec_long_name: str = ""
    format_name: str = ""
    format_long_name: str = ""
    has_video: bool = False
    metadata: Dict[str, str] = Field(default_factory=dict)
    processing_time_ms: int = Field(default=0, ge=0)

class ProbeFailure(BaseModel):
    """Failed resolution of one target. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    path: Path
    kind: FailureKind
    message: str = ""

    def __str__(self) -> str:
        if self.kind == FailureKind.NOT_FOUND:
            return f"File not found: {self.path}"
        if self.kind == FailureKind.INVALID_AUDIO_FILE:
            return f"Invalid audio file: {self.path} - {self.message}"
        if self.kind == FailureKind.TOOL_UNAVAILABLE:
            return "FFprobe not found. Please install FFmpeg."
        if self.kind == FailureKind.TOOL_EXECUTION_ERROR:
            return f"FFprobe execution error: {self.message}"
        return f"Processing error: {self.path} - {self.message}"

class BatchStatistics(BaseModel):
    total_files: int = 0
    successful: int = 0
    failed: int = 0
    processing_time_seconds: float = 0.0
    total_duration_seconds: float = 0.0
    total_size_bytes: int = 0

class BatchSummary(BaseModel):
    successes: List[AudioRecord] = Field(default_factory=list)
    failures: List[ProbeFailure] = Field(default_factory=list)
    statistics: BatchStatistics = Field(default_factory=BatchStatistics)
