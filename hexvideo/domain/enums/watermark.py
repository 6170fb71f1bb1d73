from __future__ import annotations
from enum import StrEnum


class WatermarkType(StrEnum):
    text = "text"
    image = "image"


class WatermarkPosition(StrEnum):
    top_left = "top-left"
    top_right = "top-right"
    bottom_left = "bottom-left"
    bottom_right = "bottom-right"
    center = "center"
