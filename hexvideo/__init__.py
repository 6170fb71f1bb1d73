from hexvideo.domain.dataclasses.options import (
    ConvertOptions,
    CompressOptions,
    CropOptions,
    MergeOptions,
    WatermarkOptions,
    ThumbnailOptions,
)
from hexvideo.domain.entities.media_info import MediaInfo, StreamInfo
from hexvideo.domain.errors import (
    VideoError,
    InvalidOptionsError,
    ToolUnavailableError,
    ExecutionError,
    SourceNotFoundError,
)
from hexvideo.services.ffmpeg.processor import (
    FFmpegProcessor,
    create_video_processor,
    get_default_processor,
    set_default_processor,
    reset_default_processor,
    get_video_info,
    convert,
    compress,
    crop,
    merge,
    add_watermark,
    extract_thumbnail,
)
__all__ = [
    "ConvertOptions",
    "CompressOptions",
    "CropOptions",
    "MergeOptions",
    "WatermarkOptions",
    "ThumbnailOptions",
    "MediaInfo",
    "StreamInfo",
    "VideoError",
    "InvalidOptionsError",
    "ToolUnavailableError",
    "ExecutionError",
    "SourceNotFoundError",
    "FFmpegProcessor",
    "create_video_processor",
    "get_default_processor",
    "set_default_processor",
    "reset_default_processor",
    "get_video_info",
    "convert",
    "compress",
    "crop",
    "merge",
    "add_watermark",
    "extract_thumbnail",
]
