# hexvideo/domain/dataclasses/options.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from hexvideo.domain.enums.file_format import VideoFormat
from hexvideo.domain.enums.quality import Quality
from hexvideo.domain.enums.watermark import WatermarkPosition, WatermarkType


# ---------------------------------------------------------------------------
# Per-operation option structs. Every variant carries `output`; each maps to
# exactly one builder in hexvideo.common.ffmpeg.args.
# Enum-typed fields also accept their string values until validated.
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ConvertOptions:
    output: str
    format: Optional[VideoFormat | str] = None
    codec: Optional[str] = None          # h264|h265|hevc|vp9|av1|vp8 or an ffmpeg encoder name
    resolution: Optional[str] = None     # "WxH"
    fps: Optional[float] = None
    bitrate: Optional[int] = None        # bits per second
    quality: Optional[Quality | str] = None


@dataclass(frozen=True)
class CompressOptions:
    output: str
    bitrate: Optional[int] = None
    resolution: Optional[str] = None
    quality: Optional[Quality | str] = None


@dataclass(frozen=True)
class CropOptions:
    output: str
    start: float = 0.0
    duration: Optional[float] = None     # wins over `end` when both are given
    end: Optional[float] = None


@dataclass(frozen=True)
class MergeOptions:
    output: str
    inputs: Tuple[str, ...] = ()         # concatenated in this order


@dataclass(frozen=True)
class WatermarkOptions:
    output: str
    type: WatermarkType | str = WatermarkType.text
    text: Optional[str] = None
    image: Optional[str] = None
    position: WatermarkPosition | str = WatermarkPosition.top_left
    font_size: Optional[int] = None
    color: Optional[str] = None
    opacity: Optional[float] = None
    # Shrink the overlay by `opacity` instead of blending it (pre-alpha behavior)
    legacy_opacity_scaling: bool = False


@dataclass(frozen=True)
class ThumbnailOptions:
    output: str
    time: float = 0.0
    width: Optional[int] = None
    height: Optional[int] = None
