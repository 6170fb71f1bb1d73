from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

from hexvideo.domain.dataclasses.options import (
    CompressOptions,
    ConvertOptions,
    CropOptions,
    MergeOptions,
    ThumbnailOptions,
    WatermarkOptions,
)
from hexvideo.domain.entities.media_info import MediaInfo


class VideoProcessorPort(Protocol):
    def get_info(self, video: str | Path | bytes, suffix: str = ".mp4") -> MediaInfo: ...
    def convert(self, video: str | Path, options: ConvertOptions) -> None: ...
    def compress(self, video: str | Path, options: CompressOptions) -> None: ...
    def crop(self, video: str | Path, options: CropOptions) -> None: ...
    def merge(self, videos: Sequence[str | Path], options: MergeOptions) -> None: ...
    def add_watermark(self, video: str | Path, options: WatermarkOptions) -> None: ...
    def extract_thumbnail(self, video: str | Path, options: ThumbnailOptions) -> None: ...
