# hexvideo/common/settings.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _csv_to_list(v: str | List[str] | Tuple[str, ...] | None) -> List[str]:
    """Comma-separated string or list -> stripped, non-empty items."""
    if v is None:
        return []
    items = v if isinstance(v, (list, tuple)) else str(v).split(",")
    return [s for s in (str(i).strip() for i in items if i is not None) if s]


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    prefix: str = "/api"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return _csv_to_list(v)


class FFmpegConfig(BaseModel):
    bin: str = "ffmpeg"
    auto_install: bool = True
    # None means wait for ffmpeg however long it takes
    timeout_sec: Optional[int] = Field(default=None, ge=1)

    @field_validator("auto_install", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v, default=True)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "hexvideo"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Temp files --------
    # Empty means a fresh directory under the system temp root
    temp_dir: Optional[Path] = Field(default=None, alias="HEXVIDEO_TEMP_DIR")

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    ffmpeg: FFmpegConfig = FFmpegConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from hexvideo.common.settings import get_settings
        cfg = get_settings()
    """
    s = Settings()  # pydantic_settings will read from .env automatically
    if s.temp_dir is not None and s.app_env in ("development", "test"):
        s.temp_dir.mkdir(parents=True, exist_ok=True)
    return s
