# hexvideo/domain/errors.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(eq=False)
class VideoError(RuntimeError):
    """Base for every error a video operation can raise."""
    message: str

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class InvalidOptionsError(VideoError, ValueError):
    """Options were rejected before any process was spawned."""
    field: Optional[str] = None


@dataclass(eq=False)
class ToolUnavailableError(VideoError):
    """ffmpeg could not be located or executed at all."""
    hint: str = ""

    def __str__(self) -> str:
        return f"{self.message}{self.hint}" if self.hint else self.message


@dataclass(eq=False)
class ExecutionError(VideoError):
    """ffmpeg ran but reported failure; `diagnostics` is its stderr, verbatim."""
    diagnostics: str = ""
    exit_code: Optional[int] = None

    def __str__(self) -> str:
        if self.diagnostics:
            return f"{self.message}: {self.diagnostics}"
        return self.message


@dataclass(eq=False)
class SourceNotFoundError(VideoError):
    """An input path does not exist (checked before ffmpeg is invoked)."""
    path: str = ""
