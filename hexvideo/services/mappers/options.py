# hexvideo/services/mappers/options.py
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Type, TypeVar

from pydantic import BaseModel

from hexvideo.domain.dataclasses.options import (
    CompressOptions,
    ConvertOptions,
    CropOptions,
    MergeOptions,
    ThumbnailOptions,
    WatermarkOptions,
)
from hexvideo.domain.entities.media_info import MediaInfo
from hexvideo.services.schemas.video import (
    CompressRequest,
    ConvertRequest,
    CropRequest,
    MediaInfoRead,
    MergeRequest,
    StreamRead,
    ThumbnailRequest,
    WatermarkRequest,
)

O = TypeVar("O")


def _to_options(cls: Type[O], req: BaseModel, **extra: Any) -> O:
    data = req.model_dump(exclude={"input"})
    data.update(extra)
    return cls(**data)


def to_convert_options(req: ConvertRequest) -> ConvertOptions:
    return _to_options(ConvertOptions, req)


def to_compress_options(req: CompressRequest) -> CompressOptions:
    return _to_options(CompressOptions, req)


def to_crop_options(req: CropRequest) -> CropOptions:
    return _to_options(CropOptions, req)


def to_merge_options(req: MergeRequest) -> MergeOptions:
    return _to_options(MergeOptions, req, inputs=tuple(req.inputs))


def to_watermark_options(req: WatermarkRequest) -> WatermarkOptions:
    return _to_options(WatermarkOptions, req)


def to_thumbnail_options(req: ThumbnailRequest) -> ThumbnailOptions:
    return _to_options(ThumbnailOptions, req)


def to_media_info_read(info: MediaInfo) -> MediaInfoRead:
    data = asdict(info)
    data["streams"] = [StreamRead(**s) for s in data["streams"]]
    return MediaInfoRead(**data, resolution=info.resolution, has_audio=info.has_audio)
