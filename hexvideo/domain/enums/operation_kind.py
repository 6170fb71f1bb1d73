from __future__ import annotations
from enum import StrEnum


class OperationKind(StrEnum):
    info = "info"
    convert = "convert"
    compress = "compress"
    crop = "crop"
    merge = "merge"
    watermark = "watermark"
    thumbnail = "thumbnail"

    @property
    def mutating(self) -> bool:
        return self is not OperationKind.info
