from hexvideo.services.schemas.video import (
    ProbeRequest,
    StreamRead,
    MediaInfoRead,
    ConvertRequest,
    CompressRequest,
    CropRequest,
    MergeRequest,
    WatermarkRequest,
    ThumbnailRequest,
    OperationResponse,
)
__all__ = [
    "ProbeRequest",
    "StreamRead",
    "MediaInfoRead",
    "ConvertRequest",
    "CompressRequest",
    "CropRequest",
    "MergeRequest",
    "WatermarkRequest",
    "ThumbnailRequest",
    "OperationResponse",
]
