# hexvideo/common/probe/diagnostics.py
"""
Best-effort extraction of MediaInfo fields from the banner ffmpeg writes to
stderr (`ffmpeg -i <file> -hide_banner -f null -`).

The banner is free text whose layout shifts between ffmpeg releases, so each
field has its own pattern and its own extractor returning None on a miss.
Nothing here raises on a partial match; parse_diagnostics fills defaults.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Tuple

from hexvideo.common.logging import get_logger
from hexvideo.domain.entities.media_info import MediaInfo, StreamInfo

logger = get_logger()

DURATION_RE = re.compile(r"Duration:\s*(\d{2}):(\d{2}):(\d{2}(?:\.\d+)?)")
# width, height and fps must all come from the same Video: line
VIDEO_RE = re.compile(r"Video:[^\n]*?\b(\d{2,5})x(\d{2,5})\b[^\n]*?(\d+(?:\.\d+)?)\s*fps")
BITRATE_RE = re.compile(r"bitrate:\s*(\d+)\s*kb/s", re.IGNORECASE)
VIDEO_CODEC_RE = re.compile(r"Video:[^\n]*?\b([hx]264|hevc|h265|vp9|av1|vp8)\b", re.IGNORECASE)
AUDIO_LINE_RE = re.compile(r"Audio:[^\n]*")
AUDIO_CODEC_RE = re.compile(r"Audio:\s*([A-Za-z0-9_]+)")
AUDIO_BITRATE_RE = re.compile(r"\b(\d+)\s*kb/s", re.IGNORECASE)
AUDIO_SAMPLE_RATE_RE = re.compile(r"\b(\d+)\s*Hz", re.IGNORECASE)
STREAM_RE = re.compile(
    r"Stream\s+#(\d+:\d+)(?:\[[^\]]*\])?(?:\([^)]*\))?:\s*(Video|Audio|Subtitle|Data):\s*([A-Za-z0-9_]+)"
)


# ---- per-field extractors ------------------------------------------------------
def parse_duration(text: str) -> Optional[float]:
    m = DURATION_RE.search(text)
    if not m:
        return None
    hours, minutes, seconds = int(m.group(1)), int(m.group(2)), float(m.group(3))
    return hours * 3600 + minutes * 60 + seconds


def parse_video_geometry(text: str) -> Optional[Tuple[int, int, float]]:
    """(width, height, fps) from one Video: line, or None when any is missing."""
    m = VIDEO_RE.search(text)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2)), float(m.group(3))


def parse_bitrate(text: str) -> Optional[int]:
    """Overall bitrate in bits per second (banner reports kb/s)."""
    m = BITRATE_RE.search(text)
    return int(m.group(1)) * 1000 if m else None


def parse_video_codec(text: str) -> Optional[str]:
    m = VIDEO_CODEC_RE.search(text)
    return m.group(1).lower() if m else None


def _audio_line(text: str) -> Optional[str]:
    m = AUDIO_LINE_RE.search(text)
    return m.group(0) if m else None


def parse_audio_codec(text: str) -> Optional[str]:
    line = _audio_line(text)
    if line is None:
        return None
    m = AUDIO_CODEC_RE.search(line)
    return m.group(1).lower() if m else None


def parse_audio_bitrate(text: str) -> Optional[int]:
    line = _audio_line(text)
    if line is None:
        return None
    m = AUDIO_BITRATE_RE.search(line)
    return int(m.group(1)) * 1000 if m else None


def parse_audio_sample_rate(text: str) -> Optional[int]:
    line = _audio_line(text)
    if line is None:
        return None
    m = AUDIO_SAMPLE_RATE_RE.search(line)
    return int(m.group(1)) if m else None


def parse_streams(text: str) -> List[StreamInfo]:
    return [
        StreamInfo(index=m.group(1), type=m.group(2).lower(), codec=m.group(3).lower())
        for m in STREAM_RE.finditer(text)
    ]


def format_from_path(source: str | Path | None) -> str:
    """Container name from the file extension, lower-cased; "" when there is none."""
    if source is None:
        return ""
    return Path(str(source)).suffix.lstrip(".").lower()


# ---- assembly --------------------------------------------------------------------
def parse_diagnostics(text: str | bytes | None, size_bytes: int, source: str | Path | None) -> MediaInfo:
    """
    Build a MediaInfo from ffmpeg's stderr banner.
    `size_bytes` comes from the caller (stat or buffer length) and `source`
    only supplies the container name; neither is read from the banner.
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    text = text or ""

    geometry = parse_video_geometry(text)
    width, height, fps = geometry if geometry else (0, 0, 0.0)
    if geometry is None:
        logger.debug("No Video: banner with WxH and fps found for %s", source)

    return MediaInfo(
        duration_sec=parse_duration(text) or 0.0,
        width=width,
        height=height,
        fps=fps,
        bitrate=parse_bitrate(text) or 0,
        audio_bitrate=parse_audio_bitrate(text),
        audio_sample_rate=parse_audio_sample_rate(text),
        format=format_from_path(source),
        codec=parse_video_codec(text) or "unknown",
        audio_codec=parse_audio_codec(text),
        size_bytes=max(0, int(size_bytes or 0)),
        streams=tuple(parse_streams(text)),
    )
