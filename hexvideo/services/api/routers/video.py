# hexvideo/services/api/routers/video.py
from __future__ import annotations
from fastapi import APIRouter, Depends

from hexvideo.common.settings import get_settings
from hexvideo.domain.ports.video import VideoProcessorPort
from hexvideo.services.api.deps import get_video_processor
from hexvideo.services.mappers.options import (
    to_compress_options,
    to_convert_options,
    to_crop_options,
    to_media_info_read,
    to_merge_options,
    to_thumbnail_options,
    to_watermark_options,
)
from hexvideo.services.schemas.video import (
    CompressRequest,
    ConvertRequest,
    CropRequest,
    MediaInfoRead,
    MergeRequest,
    OperationResponse,
    ProbeRequest,
    ThumbnailRequest,
    WatermarkRequest,
)

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/video", tags=["video"])


@router.post("/info", response_model=MediaInfoRead)
def video_info(
    req: ProbeRequest,
    processor: VideoProcessorPort = Depends(get_video_processor),
) -> MediaInfoRead:
    return to_media_info_read(processor.get_info(req.path))


@router.post("/convert", response_model=OperationResponse)
def convert_video(
    req: ConvertRequest,
    processor: VideoProcessorPort = Depends(get_video_processor),
) -> OperationResponse:
    processor.convert(req.input, to_convert_options(req))
    return OperationResponse(operation="convert", output=req.output)


@router.post("/compress", response_model=OperationResponse)
def compress_video(
    req: CompressRequest,
    processor: VideoProcessorPort = Depends(get_video_processor),
) -> OperationResponse:
    processor.compress(req.input, to_compress_options(req))
    return OperationResponse(operation="compress", output=req.output)


@router.post("/crop", response_model=OperationResponse)
def crop_video(
    req: CropRequest,
    processor: VideoProcessorPort = Depends(get_video_processor),
) -> OperationResponse:
    processor.crop(req.input, to_crop_options(req))
    return OperationResponse(operation="crop", output=req.output)


@router.post("/merge", response_model=OperationResponse)
def merge_videos(
    req: MergeRequest,
    processor: VideoProcessorPort = Depends(get_video_processor),
) -> OperationResponse:
    processor.merge(req.inputs, to_merge_options(req))
    return OperationResponse(operation="merge", output=req.output)


@router.post("/watermark", response_model=OperationResponse)
def watermark_video(
    req: WatermarkRequest,
    processor: VideoProcessorPort = Depends(get_video_processor),
) -> OperationResponse:
    processor.add_watermark(req.input, to_watermark_options(req))
    return OperationResponse(operation="watermark", output=req.output)


@router.post("/thumbnail", response_model=OperationResponse)
def video_thumbnail(
    req: ThumbnailRequest,
    processor: VideoProcessorPort = Depends(get_video_processor),
) -> OperationResponse:
    processor.extract_thumbnail(req.input, to_thumbnail_options(req))
    return OperationResponse(operation="thumbnail", output=req.output)
