# hexvideo/services/ffmpeg/processor.py
from __future__ import annotations

import dataclasses
import threading
from pathlib import Path
from typing import Optional, Sequence, cast

from hexvideo.common.settings import get_settings
from hexvideo.domain.dataclasses.options import (
    CompressOptions,
    ConvertOptions,
    CropOptions,
    MergeOptions,
    ThumbnailOptions,
    WatermarkOptions,
)
from hexvideo.domain.entities.media_info import MediaInfo
from hexvideo.domain.enums.operation_kind import OperationKind
from hexvideo.domain.ports.files import FileStorePort
from hexvideo.domain.ports.process import ProcessRunnerPort
from hexvideo.domain.ports.video import VideoProcessorPort
from hexvideo.services.ffmpeg.dispatcher import OperationDispatcher
from hexvideo.services.ffmpeg.toolcheck import ensure_ffmpeg
from hexvideo.services.filesystem.local_file_store import LocalFileStore
from hexvideo.services.process.subprocess_runner import SubprocessRunner


class FFmpegProcessor(VideoProcessorPort):
    """
    VideoProcessorPort backed by the ffmpeg command line.
    Every method is one dispatcher call; mutating ones return None and leave
    the output file to ffmpeg.
    """

    def __init__(self, dispatcher: OperationDispatcher):
        self.dispatcher = dispatcher

    @property
    def ffmpeg_bin(self) -> str:
        return self.dispatcher.ffmpeg_bin

    def get_info(self, video: str | Path | bytes, suffix: str = ".mp4") -> MediaInfo:
        return cast(MediaInfo, self.dispatcher.execute(OperationKind.info, video, suffix=suffix))

    def convert(self, video: str | Path, options: ConvertOptions) -> None:
        self.dispatcher.execute(OperationKind.convert, video, options)

    def compress(self, video: str | Path, options: CompressOptions) -> None:
        self.dispatcher.execute(OperationKind.compress, video, options)

    def crop(self, video: str | Path, options: CropOptions) -> None:
        self.dispatcher.execute(OperationKind.crop, video, options)

    def merge(self, videos: Sequence[str | Path], options: MergeOptions) -> None:
        if videos:
            options = dataclasses.replace(options, inputs=tuple(str(v) for v in videos))
        self.dispatcher.execute(OperationKind.merge, None, options)

    def add_watermark(self, video: str | Path, options: WatermarkOptions) -> None:
        self.dispatcher.execute(OperationKind.watermark, video, options)

    def extract_thumbnail(self, video: str | Path, options: ThumbnailOptions) -> None:
        self.dispatcher.execute(OperationKind.thumbnail, video, options)


def create_video_processor(
    ffmpeg_bin: Optional[str] = None,
    temp_dir: Optional[Path | str] = None,
    auto_install: Optional[bool] = None,
    runner: Optional[ProcessRunnerPort] = None,
    files: Optional[FileStorePort] = None,
) -> FFmpegProcessor:
    """
    Build a processor, checking first that ffmpeg can be run.
    Unset arguments fall back to settings (FFMPEG__BIN, FFMPEG__AUTO_INSTALL,
    HEXVIDEO_TEMP_DIR). Raises ToolUnavailableError with install guidance.
    """
    cfg = get_settings()
    runner = runner or SubprocessRunner(timeout_sec=cfg.ffmpeg.timeout_sec)
    if auto_install is None:
        auto_install = cfg.ffmpeg.auto_install

    command = ensure_ffmpeg(ffmpeg_bin or cfg.ffmpeg.bin, auto_install=auto_install, runner=runner)
    files = files or LocalFileStore(temp_dir or cfg.temp_dir)
    return FFmpegProcessor(OperationDispatcher(runner=runner, files=files, ffmpeg_bin=command))


# ---- shared default instance -------------------------------------------------------
_default_processor: Optional[VideoProcessorPort] = None
_default_lock = threading.Lock()


def get_default_processor(auto_install: Optional[bool] = None) -> VideoProcessorPort:
    """
    Created on first use (ffmpeg check included), then reused.
    `auto_install` only matters for that first call; None defers to settings.
    """
    global _default_processor
    if _default_processor is None:
        with _default_lock:
            if _default_processor is None:
                _default_processor = create_video_processor(auto_install=auto_install)
    return _default_processor


def set_default_processor(processor: Optional[VideoProcessorPort]) -> None:
    global _default_processor
    with _default_lock:
        _default_processor = processor


def reset_default_processor() -> None:
    set_default_processor(None)


def get_video_info(video: str | Path | bytes, suffix: str = ".mp4") -> MediaInfo:
    return get_default_processor().get_info(video, suffix=suffix)


def convert(video: str | Path, options: ConvertOptions) -> None:
    get_default_processor().convert(video, options)


def compress(video: str | Path, options: CompressOptions) -> None:
    get_default_processor().compress(video, options)


def crop(video: str | Path, options: CropOptions) -> None:
    get_default_processor().crop(video, options)


def merge(videos: Sequence[str | Path], options: MergeOptions) -> None:
    get_default_processor().merge(videos, options)


def add_watermark(video: str | Path, options: WatermarkOptions) -> None:
    get_default_processor().add_watermark(video, options)


def extract_thumbnail(video: str | Path, options: ThumbnailOptions) -> None:
    get_default_processor().extract_thumbnail(video, options)
