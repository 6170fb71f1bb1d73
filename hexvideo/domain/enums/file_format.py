# hexvideo/domain/enums/file_format.py
from __future__ import annotations

from enum import StrEnum


class VideoFormat(StrEnum):
    MP4 = "mp4"
    WEBM = "webm"
    AVI = "avi"
    MOV = "mov"
    MKV = "mkv"
    FLV = "flv"
    WMV = "wmv"


class VideoCodec(StrEnum):
    H264 = "h264"
    H265 = "h265"
    HEVC = "hevc"
    VP9 = "vp9"
    AV1 = "av1"
    VP8 = "vp8"
