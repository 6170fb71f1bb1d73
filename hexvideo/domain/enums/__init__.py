from hexvideo.domain.enums.file_format import VideoFormat, VideoCodec
from hexvideo.domain.enums.operation_kind import OperationKind
from hexvideo.domain.enums.quality import Quality
from hexvideo.domain.enums.watermark import WatermarkType, WatermarkPosition
__all__ = [
    "VideoFormat",
    "VideoCodec",
    "OperationKind",
    "Quality",
    "WatermarkType",
    "WatermarkPosition",
]
