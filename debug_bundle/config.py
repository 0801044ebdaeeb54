"""Configuration for the debug bundle server and CLI."""

from pydantic import BaseModel, field_validator, model_validator

from debug_bundle.sources import DEFAULT_HEAP_TOP, DEFAULT_SAMPLE_INTERVAL

DEFAULT_PATH = "/debug/dump"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 9090
DEFAULT_PROFILE_DURATION = 5.0
MAX_PROFILE_DURATION = 300.0


class BundleConfig(BaseModel):
    """Configuration for serving debug bundles."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    path: str = DEFAULT_PATH
    profile_duration: float = DEFAULT_PROFILE_DURATION
    sample_interval: float = DEFAULT_SAMPLE_INTERVAL
    heap_top: int = DEFAULT_HEAP_TOP
    trace_malloc: bool = False

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("path must start with '/'")
        return v

    @field_validator("profile_duration")
    @classmethod
    def validate_profile_duration(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("profile_duration must be positive")
        if v > MAX_PROFILE_DURATION:
            raise ValueError(f"profile_duration exceeds maximum ({MAX_PROFILE_DURATION:.0f}s)")
        return v

    @field_validator("sample_interval")
    @classmethod
    def validate_sample_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("sample_interval must be positive")
        return v

    @field_validator("heap_top")
    @classmethod
    def validate_heap_top(cls, v: int) -> int:
        if v < 1:
            raise ValueError("heap_top must be at least 1")
        return v

    @model_validator(mode="after")
    def validate_interval_within_duration(self) -> "BundleConfig":
        if self.sample_interval >= self.profile_duration:
            raise ValueError("sample_interval must be shorter than profile_duration")
        return self
