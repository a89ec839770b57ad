from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

DEFAULT_EXTENSIONS = [
    "mp3", "wav", "flac", "aac", "ogg", "m4a", "wma", "opus", "mp2", "ac3",
    "dts", "ape", "aiff", "au", "ra", "amr", "webm", "mkv", "m4b", "m4p",
]

class GeneralConfig(BaseModel):
    max_concurrent: int = Field(default=50, gt=0)
    extensions: List[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    recursive: bool = False
    use_ffprobe: bool = True
    ffprobe_path: str = "ffprobe"
    log_path: Optional[str] = None
    debug: bool = False

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: List[str]) -> List[str]:
        normalized = []
        for ext in v:
            cleaned = ext.strip().lstrip(".").lower()
            if not cleaned:
                raise ValueError("Empty extension in extensions list")
            if cleaned not in normalized:
                normalized.append(cleaned)
        return normalized

class OutputConfig(BaseModel):
    json_output: bool = False
    indent: int = Field(default=2, ge=0, le=8)

class AppConfig(BaseModel):
    general: GeneralConfig = Field(default_factory=GeneralConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
