# hexvideo/services/ffmpeg/dispatcher.py
from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from hexvideo.common.ffmpeg.args import (
    FFmpegCommand,
    build_compress_args,
    build_convert_args,
    build_crop_args,
    build_merge_args,
    build_probe_args,
    build_thumbnail_args,
    build_watermark_args,
    command_as_string,
)
from hexvideo.common.logging import get_logger
from hexvideo.common.probe.diagnostics import parse_diagnostics
from hexvideo.domain.entities.media_info import MediaInfo
from hexvideo.domain.enums.operation_kind import OperationKind
from hexvideo.domain.enums.watermark import WatermarkType
from hexvideo.domain.errors import ExecutionError, InvalidOptionsError, SourceNotFoundError
from hexvideo.domain.ports.files import FileStorePort
from hexvideo.domain.ports.process import ProcessResult, ProcessRunnerPort
from hexvideo.domain.policies.option_validator import OptionValidator

logger = get_logger()

Source = str | Path | bytes | bytearray | memoryview

_BUILDERS: Dict[OperationKind, Callable[[str, Any], FFmpegCommand]] = {
    OperationKind.convert: build_convert_args,
    OperationKind.compress: build_compress_args,
    OperationKind.crop: build_crop_args,
    OperationKind.watermark: build_watermark_args,
    OperationKind.thumbnail: build_thumbnail_args,
}


def _is_local(path: str) -> bool:
    # URLs and pipes are left for ffmpeg to resolve
    return "://" not in path and not path.startswith("pipe:")


class OperationDispatcher:
    """
    One linear pipeline per call:
      validate -> (temp file for in-memory input) -> build argv -> run ffmpeg
      -> parse banner (info only).
    Holds no per-call state, so one instance can serve concurrent callers.

    Missing local inputs are reported as SourceNotFoundError before ffmpeg is
    spawned; anything ffmpeg itself rejects surfaces as ExecutionError.
    """

    def __init__(
        self,
        runner: ProcessRunnerPort,
        files: FileStorePort,
        ffmpeg_bin: str = "ffmpeg",
        validator: Optional[OptionValidator] = None,
    ) -> None:
        self.runner = runner
        self.files = files
        self.ffmpeg_bin = ffmpeg_bin
        self.validator = validator or OptionValidator()

    # ---- public ---------------------------------------------------------------
    def execute(
        self,
        kind: OperationKind | str,
        source: Optional[Source] = None,
        options: Any = None,
        *,
        suffix: str = ".mp4",
    ) -> Optional[MediaInfo]:
        """
        Returns MediaInfo for `info`, None for every mutating operation.
        `source` is ignored for merge (inputs live in MergeOptions) and may be
        raw bytes only for `info`; `suffix` names the temp file for bytes.
        """
        op = self.validator.operation_kind(kind)
        opts = self.validator.validate(op, options)

        if not op.mutating:
            return self._probe(source, suffix)
        if op is OperationKind.merge:
            self._merge(opts)
            return None

        src = self._source_path(op, source)
        self._require_exists(src)
        if op is OperationKind.watermark and opts.type is WatermarkType.image:
            self._require_exists(opts.image)

        self._run(_BUILDERS[op](src, opts))
        return None

    # ---- operations -------------------------------------------------------------
    def _probe(self, source: Optional[Source], suffix: str) -> MediaInfo:
        with self._materialize(source, suffix) as (path, size):
            res = self._run(build_probe_args(path))
            return parse_diagnostics(res.stderr, size, path)

    def _merge(self, opts: Any) -> None:
        for p in opts.inputs:
            self._require_exists(p)
        list_file = self.files.create_temp_file(".txt")
        try:
            cmd = build_merge_args(list_file, opts)
            self.files.write_text(list_file, cmd.list_content or "")
            self._run(cmd)
        finally:
            self._cleanup(list_file)

    # ---- helpers ----------------------------------------------------------------
    def _run(self, cmd: FFmpegCommand) -> ProcessResult:
        logger.debug("ffmpeg cmd: %s", command_as_string(self.ffmpeg_bin, cmd.args))
        res = self.runner.run(self.ffmpeg_bin, cmd.args, capture_stdout=True, capture_stderr=True)
        if not res.succeeded:
            diagnostics = (res.stderr or b"").decode("utf-8", errors="replace")
            logger.warning("ffmpeg exited with %s for %s", res.exit_code, cmd.paths)
            raise ExecutionError("FFmpeg processing failed", diagnostics=diagnostics, exit_code=res.exit_code)
        return res

    @contextmanager
    def _materialize(self, source: Optional[Source], suffix: str) -> Iterator[Tuple[str, int]]:
        """Yield (path, size); bytes go to a temp file that is always removed."""
        if isinstance(source, (bytes, bytearray, memoryview)):
            data = bytes(source)
            tmp = self.files.create_temp_file(suffix)
            try:
                self.files.write_bytes(tmp, data)
                yield tmp, len(data)
            finally:
                self._cleanup(tmp)
            return

        path = self._source_path(OperationKind.info, source)
        self._require_exists(path)
        size = self.files.stat_size(path) if _is_local(path) else 0
        yield path, size

    def _source_path(self, op: OperationKind, source: Optional[Source]) -> str:
        if isinstance(source, (bytes, bytearray, memoryview)):
            raise InvalidOptionsError(f"{op.value} needs a file path, not in-memory bytes", field="source")
        path = str(source).strip() if source is not None else ""
        if not path:
            raise InvalidOptionsError("input video path must not be empty", field="source")
        return path

    def _require_exists(self, path: Optional[str]) -> None:
        if path and _is_local(path) and not self.files.exists(path):
            raise SourceNotFoundError(f"File not found: {path}", path=path)

    def _cleanup(self, path: str) -> None:
        try:
            self.files.remove_file(path)
        except Exception as e:
            # never mask the primary outcome
            logger.warning("Could not remove temp file %s: %s", path, e)
