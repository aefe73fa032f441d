import re
from typing import List
from pydantic import BaseModel, Field, field_validator

class SourceConfig(BaseModel):
    """Where the gallery lives and how to reach it."""
    base_url: str = "http://localhost:8000/"
    videos_dir: str = "videos/"
    manifest_name: str = "videos.json"
    timeout_s: float = Field(default=30.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip()
        if not re.match(r"^https?://", v, re.IGNORECASE):
            raise ValueError(f"base_url must be an http(s) URL, got: {v!r}")
        return v if v.endswith("/") else f"{v}/"

    @field_validator("videos_dir")
    @classmethod
    def validate_videos_dir(cls, v: str) -> str:
        cleaned = v.strip().strip("/")
        if not cleaned:
            raise ValueError("videos_dir must not be empty")
        return f"{cleaned}/"

    @field_validator("manifest_name")
    @classmethod
    def validate_manifest_name(cls, v: str) -> str:
        cleaned = v.strip().lstrip("/")
        if not cleaned:
            raise ValueError("manifest_name must not be empty")
        return cleaned

    @property
    def manifest_path(self) -> str:
        return f"{self.videos_dir}{self.manifest_name}"

class GeneralConfig(BaseModel):
    extensions: List[str] = Field(default_factory=lambda: [".mp4"])
    sensitive_pattern: str = "nsfw"
    log_path: str = "/tmp/vidgal/discovery.log"
    debug: bool = False

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: List[str]) -> List[str]:
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        if not normalized:
            raise ValueError("extensions must contain at least one media extension")
        return normalized

    @field_validator("sensitive_pattern")
    @classmethod
    def validate_sensitive_pattern(cls, v: str) -> str:
        if not v:
            raise ValueError("sensitive_pattern must not be empty")
        try:
            re.compile(v)
        except re.error as exc:
            raise ValueError(f"Invalid sensitive_pattern {v!r}: {exc}")
        return v

class AppConfig(BaseModel):
    source: SourceConfig = Field(default_factory=SourceConfig)
    general: GeneralConfig = Field(default_factory=GeneralConfig)
