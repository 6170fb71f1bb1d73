from __future__ import annotations
from enum import StrEnum

class Quality(StrEnum):
    low = "low"
    medium = "medium"
    high = "high"
