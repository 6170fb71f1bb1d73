# hexvideo/services/schemas/video.py
from __future__ import annotations

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

QualityLiteral = Literal["low", "medium", "high"]
PositionLiteral = Literal["top-left", "top-right", "bottom-left", "bottom-right", "center"]


class ProbeRequest(BaseModel):
    path: str = Field(..., min_length=1, examples=["/media/in/clip.mp4"])


class StreamRead(BaseModel):
    index: str = Field(..., examples=["0:0"])
    type: str = Field(..., examples=["video", "audio", "subtitle"])
    codec: str = Field(..., examples=["h264"])


class MediaInfoRead(BaseModel):
    duration_sec: float
    width: int
    height: int
    fps: float
    bitrate: int
    audio_bitrate: Optional[int] = None
    audio_sample_rate: Optional[int] = None
    format: str
    codec: str
    audio_codec: Optional[str] = None
    size_bytes: int
    streams: List[StreamRead] = Field(default_factory=list)
    resolution: Optional[str] = Field(None, examples=["1920x1080"])
    has_audio: bool = False


class _SingleInput(BaseModel):
    input: str = Field(..., min_length=1, examples=["/media/in/clip.mp4"])
    output: str = Field(..., min_length=1, examples=["/media/out/clip.webm"])


class ConvertRequest(_SingleInput):
    format: Optional[Literal["mp4", "webm", "avi", "mov", "mkv", "flv", "wmv"]] = None
    codec: Optional[str] = Field(None, examples=["h264", "vp9", "av1"])
    resolution: Optional[str] = Field(None, examples=["1280x720"])
    fps: Optional[float] = None
    bitrate: Optional[int] = Field(None, description="Video bitrate in bits per second")
    quality: Optional[QualityLiteral] = None


class CompressRequest(_SingleInput):
    bitrate: Optional[int] = None
    resolution: Optional[str] = None
    quality: Optional[QualityLiteral] = None


class CropRequest(_SingleInput):
    start: float = 0.0
    duration: Optional[float] = None
    end: Optional[float] = None


class MergeRequest(BaseModel):
    inputs: List[str] = Field(..., examples=[["/media/in/a.mp4", "/media/in/b.mp4"]])
    output: str = Field(..., min_length=1)


class WatermarkRequest(_SingleInput):
    type: Literal["text", "image"]
    text: Optional[str] = None
    image: Optional[str] = None
    position: PositionLiteral = "top-left"
    font_size: Optional[int] = None
    color: Optional[str] = None
    opacity: Optional[float] = None
    legacy_opacity_scaling: bool = False


class ThumbnailRequest(_SingleInput):
    time: float = 0.0
    width: Optional[int] = None
    height: Optional[int] = None


class OperationResponse(BaseModel):
    ok: bool = True
    operation: str
    output: str
