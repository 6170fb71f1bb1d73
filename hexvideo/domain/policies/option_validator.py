# hexvideo/domain/policies/option_validator.py
from __future__ import annotations

import dataclasses
import re
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Type, TypeVar

from hexvideo.domain.dataclasses.options import (
    CompressOptions,
    ConvertOptions,
    CropOptions,
    MergeOptions,
    ThumbnailOptions,
    WatermarkOptions,
)
from hexvideo.domain.enums.file_format import VideoFormat
from hexvideo.domain.enums.operation_kind import OperationKind
from hexvideo.domain.enums.quality import Quality
from hexvideo.domain.enums.watermark import WatermarkPosition, WatermarkType
from hexvideo.domain.errors import InvalidOptionsError

E = TypeVar("E")

RESOLUTION_RE = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+)\s*$")

OPTION_TYPES: Dict[OperationKind, Type[Any]] = {
    OperationKind.convert: ConvertOptions,
    OperationKind.compress: CompressOptions,
    OperationKind.crop: CropOptions,
    OperationKind.merge: MergeOptions,
    OperationKind.watermark: WatermarkOptions,
    OperationKind.thumbnail: ThumbnailOptions,
}


class OptionValidator:
    """
    Normalizes and checks per-operation option structs before any ffmpeg
    argument is built. Pure: no filesystem access, no side effects.

    validate(kind, options) returns a normalized copy of the options
    (strings coerced to enums, codec lower-cased, paths as str) or raises
    InvalidOptionsError naming the offending field.
    """

    def validate(self, kind: OperationKind | str, options: Any) -> Any:
        op = self.operation_kind(kind)
        if op is OperationKind.info:
            # probing takes no options
            return None

        expected = OPTION_TYPES[op]
        if isinstance(options, Mapping):
            options = self._from_mapping(expected, options)
        if not isinstance(options, expected):
            raise InvalidOptionsError(
                f"{op.value} expects {expected.__name__}, got {type(options).__name__}",
                field="options",
            )

        output = _path_str(options.output)
        if not output:
            raise InvalidOptionsError("output path must not be empty", field="output")
        options = dataclasses.replace(options, output=output)

        checks: Dict[OperationKind, Callable[[Any], Any]] = {
            OperationKind.convert: self._convert,
            OperationKind.compress: self._compress,
            OperationKind.crop: self._crop,
            OperationKind.merge: self._merge,
            OperationKind.watermark: self._watermark,
            OperationKind.thumbnail: self._thumbnail,
        }
        return checks[op](options)

    # ---- per-kind rules -------------------------------------------------------
    def _convert(self, o: ConvertOptions) -> ConvertOptions:
        codec = None
        if o.codec is not None:
            codec = str(o.codec).strip().lower()
            if not codec:
                raise InvalidOptionsError("codec must not be blank", field="codec")
        return dataclasses.replace(
            o,
            format=_enum(VideoFormat, o.format, "format"),
            codec=codec,
            resolution=_resolution(o.resolution),
            fps=_positive(o.fps, "fps"),
            bitrate=_positive_int(o.bitrate, "bitrate"),
            quality=_enum(Quality, o.quality, "quality"),
        )

    def _compress(self, o: CompressOptions) -> CompressOptions:
        return dataclasses.replace(
            o,
            bitrate=_positive_int(o.bitrate, "bitrate"),
            resolution=_resolution(o.resolution),
            quality=_enum(Quality, o.quality, "quality"),
        )

    def _crop(self, o: CropOptions) -> CropOptions:
        start = _number(o.start, "start")
        if start is None or start < 0:
            raise InvalidOptionsError("start must be >= 0", field="start")
        if o.duration is None and o.end is None:
            raise InvalidOptionsError("crop needs either duration or end", field="duration")
        duration = _positive(o.duration, "duration")
        end = _number(o.end, "end")
        # duration wins; end is only checked when it will be used
        if duration is None and end is not None and end <= start:
            raise InvalidOptionsError("end must be greater than start", field="end")
        return dataclasses.replace(o, start=start, duration=duration, end=end)

    def _merge(self, o: MergeOptions) -> MergeOptions:
        if isinstance(o.inputs, (str, bytes, Path)):
            raise InvalidOptionsError("inputs must be a list of paths", field="inputs")
        inputs = tuple(_path_str(p) for p in (o.inputs or ()))
        if len(inputs) < 2:
            raise InvalidOptionsError("merge needs at least 2 input videos", field="inputs")
        if any(not p for p in inputs):
            raise InvalidOptionsError("merge input paths must not be empty", field="inputs")
        return dataclasses.replace(o, inputs=inputs)

    def _watermark(self, o: WatermarkOptions) -> WatermarkOptions:
        wtype = _enum(WatermarkType, o.type, "type")
        position = _enum(WatermarkPosition, o.position, "position") or WatermarkPosition.top_left

        opacity = _number(o.opacity, "opacity")
        if opacity is not None and not 0.0 <= opacity <= 1.0:
            raise InvalidOptionsError("opacity must be within [0, 1]", field="opacity")

        if wtype is WatermarkType.text:
            if not o.text:
                raise InvalidOptionsError("text watermark needs `text`", field="text")
            return dataclasses.replace(
                o,
                type=wtype,
                position=position,
                opacity=opacity,
                font_size=_positive_int(o.font_size, "font_size"),
                color=(str(o.color).strip() or None) if o.color is not None else None,
            )
        if wtype is WatermarkType.image:
            image = _path_str(o.image)
            if not image:
                raise InvalidOptionsError("image watermark needs `image`", field="image")
            return dataclasses.replace(o, type=wtype, position=position, opacity=opacity, image=image)
        raise InvalidOptionsError("watermark type is required", field="type")

    def _thumbnail(self, o: ThumbnailOptions) -> ThumbnailOptions:
        time = _number(o.time, "time")
        if time is None or time < 0:
            raise InvalidOptionsError("time must be >= 0", field="time")
        return dataclasses.replace(
            o,
            time=time,
            width=_positive_int(o.width, "width"),
            height=_positive_int(o.height, "height"),
        )

    # ---- helpers ---------------------------------------------------------------
    @staticmethod
    def operation_kind(kind: OperationKind | str) -> OperationKind:
        try:
            return OperationKind(kind)
        except ValueError as e:
            raise InvalidOptionsError(f"unknown operation: {kind!r}", field="kind") from e

    @staticmethod
    def _from_mapping(expected: Type[E], data: Mapping[str, Any]) -> E:
        names = {f.name for f in dataclasses.fields(expected)}
        unknown = sorted(set(data) - names)
        if unknown:
            raise InvalidOptionsError(f"unknown option(s): {', '.join(unknown)}", field=unknown[0])
        if "output" not in data:
            raise InvalidOptionsError("output path must not be empty", field="output")
        return expected(**dict(data))


def _path_str(p: Optional[str | Path]) -> str:
    if p is None:
        return ""
    return str(p).strip()


def _enum(enum_cls: Type[E], value: Any, field: str) -> Optional[E]:
    if value is None:
        return None
    try:
        return enum_cls(str(value).strip().lower())  # type: ignore[call-arg]
    except ValueError as e:
        allowed = ", ".join(m.value for m in enum_cls)  # type: ignore[attr-defined]
        raise InvalidOptionsError(f"{field} must be one of: {allowed}", field=field) from e


def _number(value: Any, field: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidOptionsError(f"{field} must be a number", field=field)
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidOptionsError(f"{field} must be a number", field=field) from e


def _positive(value: Any, field: str) -> Optional[float]:
    n = _number(value, field)
    if n is not None and n <= 0:
        raise InvalidOptionsError(f"{field} must be > 0", field=field)
    return n


def _positive_int(value: Any, field: str) -> Optional[int]:
    n = _positive(value, field)
    if n is None:
        return None
    if not n.is_integer():
        raise InvalidOptionsError(f"{field} must be a whole number", field=field)
    return int(n)


def _resolution(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    m = RESOLUTION_RE.match(str(value))
    if not m or int(m.group(1)) <= 0 or int(m.group(2)) <= 0:
        raise InvalidOptionsError(f"resolution must look like 1280x720, got {value!r}", field="resolution")
    return f"{int(m.group(1))}x{int(m.group(2))}"


_default = OptionValidator()


def validate_options(kind: OperationKind | str, options: Any) -> Any:
    """Module-level shortcut for OptionValidator().validate."""
    return _default.validate(kind, options)
