# hexvideo/domain/entities/media_info.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class StreamInfo:
    """One `Stream #i:j` banner line: its kind (video|audio|subtitle|data) and codec token."""
    index: str
    type: str
    codec: str


@dataclass(frozen=True)
class MediaInfo:
    """
    Normalized, framework-free result of probing a video with ffmpeg.
    Built fresh per probe from the diagnostic banner; every field has a safe
    default so a partially readable banner still yields a record.
    """
    duration_sec: float = 0.0
    width: int = 0
    height: int = 0
    fps: float = 0.0
    bitrate: int = 0                       # bits per second
    audio_bitrate: Optional[int] = None    # bits per second
    audio_sample_rate: Optional[int] = None
    format: str = ""
    codec: str = "unknown"
    audio_codec: Optional[str] = None
    size_bytes: int = 0
    streams: Tuple[StreamInfo, ...] = ()

    @property
    def resolution(self) -> Optional[str]:
        if self.width and self.height:
            return f"{self.width}x{self.height}"
        return None

    @property
    def has_audio(self) -> bool:
        return self.audio_codec is not None or any(s.type == "audio" for s in self.streams)
