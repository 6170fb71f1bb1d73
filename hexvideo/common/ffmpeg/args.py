# hexvideo/common/ffmpeg/args.py
"""
Builds ffmpeg argument vectors as plain lists of strings, one builder per
operation. Builders never touch the filesystem or spawn anything, so the
exact command can be logged, pasted into a terminal, or asserted in tests.

Options are expected to have gone through OptionValidator first.
"""
from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from hexvideo.domain.dataclasses.options import (
    CompressOptions,
    ConvertOptions,
    CropOptions,
    MergeOptions,
    ThumbnailOptions,
    WatermarkOptions,
)
from hexvideo.domain.enums.file_format import VideoCodec, VideoFormat
from hexvideo.domain.enums.quality import Quality
from hexvideo.domain.enums.watermark import WatermarkPosition, WatermarkType

# logical codec -> ffmpeg encoder
CODEC_ENCODERS = {
    VideoCodec.H264: "libx264",
    VideoCodec.H265: "libx265",
    VideoCodec.HEVC: "libx265",
    VideoCodec.VP9: "libvpx-vp9",
    VideoCodec.AV1: "libaom-av1",
    VideoCodec.VP8: "libvpx",
}

# container -> ffmpeg muxer name
FORMAT_MUXERS = {
    VideoFormat.MP4: "mp4",
    VideoFormat.WEBM: "webm",
    VideoFormat.AVI: "avi",
    VideoFormat.MOV: "mov",
    VideoFormat.MKV: "matroska",
    VideoFormat.FLV: "flv",
    VideoFormat.WMV: "asf",
}

SPEED_PRESETS = {
    Quality.low: "fast",
    Quality.medium: "medium",
    Quality.high: "slow",
}

# libaom -cpu-used: higher is faster, lower is more thorough
AV1_CPU_USED = {
    Quality.low: "8",
    Quality.medium: "4",
    Quality.high: "1",
}
AV1_DEFAULT_CPU_USED = "4"
AV1_DEFAULT_CRF = 30  # 0-63, lower is better quality

AUDIO_ENCODER_DEFAULT = "aac"
AUDIO_ENCODER_AV1 = "libopus"

WATERMARK_MARGIN = 10
DEFAULT_FONT_SIZE = 24
DEFAULT_FONT_COLOR = "white"
DEFAULT_OPACITY = 1.0

OVERWRITE_FLAG = "-y"


@dataclass(frozen=True)
class FFmpegCommand:
    """
    argv for ffmpeg (without the executable) plus provenance:
      - path_indices: positions in `args` that hold file paths
      - list_content: concat list-file body, merge only
    """
    args: Tuple[str, ...]
    path_indices: Tuple[int, ...] = ()
    list_content: Optional[str] = None

    @property
    def paths(self) -> List[str]:
        return [self.args[i] for i in self.path_indices]

    def as_list(self) -> List[str]:
        return list(self.args)


class _ArgList:
    """Small accumulator that remembers where file paths were placed."""

    def __init__(self) -> None:
        self.args: List[str] = []
        self.path_indices: List[int] = []

    def add(self, *tokens: str) -> "_ArgList":
        self.args.extend(tokens)
        return self

    def add_path(self, flag: Optional[str], path: str | Path) -> "_ArgList":
        if flag:
            self.args.append(flag)
        self.path_indices.append(len(self.args))
        self.args.append(str(path))
        return self

    def finish(self, output: str | Path, list_content: Optional[str] = None) -> FFmpegCommand:
        self.args.append(OVERWRITE_FLAG)
        self.add_path(None, output)
        return self.build(list_content)

    def build(self, list_content: Optional[str] = None) -> FFmpegCommand:
        return FFmpegCommand(tuple(self.args), tuple(self.path_indices), list_content)


# ---- shared rules -------------------------------------------------------------
def format_number(value: float) -> str:
    """
    Seconds, fps or opacity as an argv token, rounded to microseconds:
    5 -> "5", 5.5 -> "5.5", 12.3 - 2.1 -> "10.2".
    """
    v = round(float(value), 6)
    if v.is_integer():
        return str(int(v))
    return f"{v:.6f}".rstrip("0").rstrip(".")


def encoder_for(codec: str) -> str:
    """Translate a logical codec name; unknown names pass through unchanged."""
    return CODEC_ENCODERS.get(codec.lower(), codec)


def is_av1(codec: Optional[str]) -> bool:
    return bool(codec) and str(codec).lower() == VideoCodec.AV1


def speed_preset(quality: Optional[Quality | str]) -> str:
    if quality is None:
        return SPEED_PRESETS[Quality.medium]
    return SPEED_PRESETS.get(Quality(quality), SPEED_PRESETS[Quality.medium])


def av1_cpu_used(quality: Optional[Quality | str]) -> str:
    if quality is None:
        return AV1_DEFAULT_CPU_USED
    return AV1_CPU_USED.get(Quality(quality), AV1_DEFAULT_CPU_USED)


def audio_encoder_for(codec: Optional[str]) -> str:
    return AUDIO_ENCODER_AV1 if is_av1(codec) else AUDIO_ENCODER_DEFAULT


def anchor_xy(
    position: WatermarkPosition | str | None,
    overlay: str,
    margin: int = WATERMARK_MARGIN,
) -> Tuple[str, str]:
    """
    (x, y) expressions placing an overlay on the canvas.
    `overlay` is the ffmpeg variable prefix for the overlay extents:
    "text" for drawtext (text_w/text_h), "overlay" for overlay (overlay_w/overlay_h).
    """
    w, h = f"{overlay}_w", f"{overlay}_h"
    pos = WatermarkPosition(position) if position is not None else WatermarkPosition.top_left
    if pos is WatermarkPosition.top_right:
        return f"main_w-{w}-{margin}", f"{margin}"
    if pos is WatermarkPosition.bottom_left:
        return f"{margin}", f"main_h-{h}-{margin}"
    if pos is WatermarkPosition.bottom_right:
        return f"main_w-{w}-{margin}", f"main_h-{h}-{margin}"
    if pos is WatermarkPosition.center:
        return f"(main_w-{w})/2", f"(main_h-{h})/2"
    return f"{margin}", f"{margin}"


def anchor_expression(position: WatermarkPosition | str | None, overlay: str = "overlay") -> str:
    x, y = anchor_xy(position, overlay)
    return f"{x}:{y}"


def escape_drawtext(text: str) -> str:
    """
    Escape text for a single-quoted drawtext value. A backslash is literal
    inside quotes, so an apostrophe closes the quote, is emitted escaped for
    the option parser, and reopens it.
    """
    text = text.replace("\\", "\\\\").replace(":", "\\:")
    return text.replace("'", "'\\\\\\''")


def concat_list_content(inputs: Iterable[str | Path]) -> str:
    """One `file '<path>'` line per input, in order, no trailing newline."""
    lines = []
    for p in inputs:
        quoted = str(p).replace("'", "'\\''")
        lines.append(f"file '{quoted}'")
    return "\n".join(lines)


def command_as_string(executable: str, args: Sequence[str]) -> str:
    """Human-readable, shell-pasteable version of the command for logging."""
    return " ".join(shlex.quote(p) for p in [executable, *args])


# ---- builders -------------------------------------------------------------------
def build_probe_args(source: str | Path) -> FFmpegCommand:
    # no output file; ffmpeg writes the stream banner to stderr
    return _ArgList().add_path("-i", source).add("-hide_banner", "-f", "null", "-").build()


def build_convert_args(source: str | Path, o: ConvertOptions) -> FFmpegCommand:
    a = _ArgList().add_path("-i", source)
    av1 = is_av1(o.codec)

    if o.codec:
        a.add("-c:v", encoder_for(o.codec))
        if av1:
            a.add("-cpu-used", av1_cpu_used(o.quality))
            if not o.bitrate:
                a.add("-crf", str(AV1_DEFAULT_CRF))

    if o.resolution:
        a.add("-s", o.resolution)
    if o.fps:
        a.add("-r", format_number(o.fps))
    if o.bitrate:
        a.add("-b:v", str(int(o.bitrate)))
    if o.quality and not av1:
        a.add("-preset", speed_preset(o.quality))

    a.add("-c:a", audio_encoder_for(o.codec))

    if o.format:
        a.add("-f", FORMAT_MUXERS[VideoFormat(o.format)])
    return a.finish(o.output)


def build_compress_args(source: str | Path, o: CompressOptions) -> FFmpegCommand:
    a = _ArgList().add_path("-i", source)
    if o.bitrate:
        a.add("-b:v", str(int(o.bitrate)))
    if o.resolution:
        a.add("-s", o.resolution)
    if o.quality:
        a.add("-preset", speed_preset(o.quality))
    a.add("-c:v", CODEC_ENCODERS[VideoCodec.H264], "-c:a", AUDIO_ENCODER_DEFAULT)
    return a.finish(o.output)


def crop_duration(o: CropOptions) -> Optional[float]:
    if o.duration is not None:
        return o.duration
    if o.end is not None:
        return o.end - o.start
    return None


def build_crop_args(source: str | Path, o: CropOptions) -> FFmpegCommand:
    a = _ArgList().add_path("-i", source)
    a.add("-ss", format_number(o.start))
    duration = crop_duration(o)
    if duration is not None:
        a.add("-t", format_number(duration))
    # stream copy, no re-encode
    a.add("-c", "copy")
    return a.finish(o.output)


def build_merge_args(list_file: str | Path, o: MergeOptions) -> FFmpegCommand:
    """`list_file` is where the caller writes `list_content` before running."""
    a = _ArgList().add("-f", "concat", "-safe", "0").add_path("-i", list_file)
    a.add("-c", "copy")
    return a.finish(o.output, list_content=concat_list_content(o.inputs))


def build_text_watermark_filter(o: WatermarkOptions) -> str:
    font_size = o.font_size or DEFAULT_FONT_SIZE
    color = o.color or DEFAULT_FONT_COLOR
    opacity = DEFAULT_OPACITY if o.opacity is None else o.opacity
    x, y = anchor_xy(o.position, "text")
    return (
        f"drawtext=text='{escape_drawtext(o.text or '')}'"
        f":fontsize={font_size}"
        f":fontcolor={color}@{format_number(opacity)}"
        f":x={x}:y={y}"
    )


def build_image_watermark_filter(o: WatermarkOptions) -> str:
    opacity = format_number(DEFAULT_OPACITY if o.opacity is None else o.opacity)
    position = anchor_expression(o.position, "overlay")
    if o.legacy_opacity_scaling:
        prepare = f"[1:v]scale=iw*{opacity}:ih*{opacity}[wm]"
    else:
        prepare = f"[1:v]format=rgba,colorchannelmixer=aa={opacity}[wm]"
    return f"{prepare};[0:v][wm]overlay={position}"


def build_watermark_args(source: str | Path, o: WatermarkOptions) -> FFmpegCommand:
    a = _ArgList().add_path("-i", source)
    wtype = WatermarkType(o.type)
    if wtype is WatermarkType.text:
        a.add("-vf", build_text_watermark_filter(o))
    else:
        a.add_path("-i", o.image or "")
        a.add("-filter_complex", build_image_watermark_filter(o))
    return a.finish(o.output)


def build_thumbnail_args(source: str | Path, o: ThumbnailOptions) -> FFmpegCommand:
    a = _ArgList().add_path("-i", source)
    a.add("-ss", format_number(o.time), "-vframes", "1")
    if o.width and o.height:
        a.add("-s", f"{o.width}x{o.height}")
    elif o.width:
        a.add("-vf", f"scale={o.width}:-1")
    elif o.height:
        a.add("-vf", f"scale=-1:{o.height}")
    return a.finish(o.output)
