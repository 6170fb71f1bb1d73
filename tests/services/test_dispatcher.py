# tests/services/test_dispatcher.py
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from hexvideo.domain.dataclasses.options import (
    CompressOptions,
    ConvertOptions,
    CropOptions,
    MergeOptions,
    ThumbnailOptions,
    WatermarkOptions,
)
from hexvideo.domain.entities.media_info import MediaInfo
from hexvideo.domain.enums import OperationKind
from hexvideo.domain.errors import ExecutionError, InvalidOptionsError, SourceNotFoundError
from hexvideo.services.ffmpeg.dispatcher import OperationDispatcher


def _temp_files(file_store) -> list:
    d = file_store.temp_dir
    return sorted(d.iterdir()) if d.exists() else []


# ---- info ---------------------------------------------------------------------------
def test_info_from_path(dispatcher, runner, video, sample_banner):
    runner.stderr = sample_banner.encode()
    info = dispatcher.execute("info", str(video))

    assert isinstance(info, MediaInfo)
    assert info.size_bytes == 2048
    assert info.format == "mp4"
    assert info.codec == "h264"
    assert (info.width, info.height) == (1920, 1080)

    exe, args, capture = runner.calls[0]
    assert exe == "ffmpeg"
    assert args == ["-i", str(video), "-hide_banner", "-f", "null", "-"]
    assert capture == {"stdout": True, "stderr": True}


def test_info_from_bytes_uses_temp_file_and_cleans_up(dispatcher, runner, file_store, sample_banner):
    runner.stderr = sample_banner.encode()
    seen = {}

    def _inspect(_exe, args):
        p = Path(args[1])
        seen["path"] = p
        seen["exists"] = p.exists()
        seen["data"] = p.read_bytes()

    runner.on_run = _inspect
    info = dispatcher.execute("info", b"\x01\x02\x03", suffix=".webm")

    assert seen["exists"]
    assert seen["data"] == b"\x01\x02\x03"
    assert seen["path"].suffix == ".webm"
    assert seen["path"].parent == file_store.temp_dir
    assert not seen["path"].exists()
    assert info.size_bytes == 3
    assert info.format == "webm"


def test_info_bytes_temp_removed_on_failure(dispatcher, runner, file_store):
    runner.succeeded = False
    runner.exit_code = 1
    runner.stderr = b"Invalid data found when processing input"

    with pytest.raises(ExecutionError) as ei:
        dispatcher.execute("info", b"not a video")
    assert "Invalid data found" in ei.value.diagnostics
    assert _temp_files(file_store) == []


def test_info_missing_file(dispatcher, runner, tmp_path):
    missing = tmp_path / "nope.mp4"
    with pytest.raises(SourceNotFoundError) as ei:
        dispatcher.execute("info", str(missing))
    assert ei.value.path == str(missing)
    assert runner.calls == []


def test_info_url_skips_existence_check(dispatcher, runner, sample_banner):
    runner.stderr = sample_banner.encode()
    info = dispatcher.execute("info", "https://example.com/stream.m3u8")
    assert info.size_bytes == 0
    assert runner.last_args[1] == "https://example.com/stream.m3u8"


def test_info_empty_source(dispatcher):
    with pytest.raises(InvalidOptionsError) as ei:
        dispatcher.execute("info", "  ")
    assert ei.value.field == "source"


# ---- mutating operations -------------------------------------------------------------
def test_thumbnail_returns_none_and_ends_with_output(dispatcher, runner, video):
    result = dispatcher.execute("thumbnail", str(video), {"time": 5, "width": 320, "output": "t.jpg"})
    assert result is None
    assert runner.last_args[-4:] == ["-vf", "scale=320:-1", "-y", "t.jpg"]


def test_convert_runs_built_vector(dispatcher, runner, video):
    dispatcher.execute("convert", video, ConvertOptions(output="o.webm", codec="av1"))
    args = runner.last_args
    assert args[:2] == ["-i", str(video)]
    assert "-crf" in args and "-b:v" not in args


def test_compress_and_crop(dispatcher, runner, video):
    dispatcher.execute("compress", video, CompressOptions(output="small.mp4", bitrate=500_000))
    assert runner.last_args[-6:] == ["-c:v", "libx264", "-c:a", "aac", "-y", "small.mp4"]

    dispatcher.execute("crop", video, CropOptions(output="c.mp4", start=1, end=4))
    assert runner.last_args[2:8] == ["-ss", "1", "-t", "3", "-c", "copy"]


def test_invalid_options_never_spawn(dispatcher, runner, video):
    with pytest.raises(InvalidOptionsError):
        dispatcher.execute("crop", video, CropOptions(output="c.mp4"))
    assert runner.calls == []


def test_missing_source_for_mutating_op(dispatcher, runner, tmp_path):
    with pytest.raises(SourceNotFoundError):
        dispatcher.execute("compress", tmp_path / "gone.mp4", CompressOptions(output="o.mp4"))
    assert runner.calls == []


def test_bytes_rejected_for_mutating_op(dispatcher, runner):
    with pytest.raises(InvalidOptionsError) as ei:
        dispatcher.execute("convert", b"data", ConvertOptions(output="o.mp4"))
    assert ei.value.field == "source"
    assert runner.calls == []


def test_image_watermark_checks_image_exists(dispatcher, runner, video, tmp_path):
    with pytest.raises(SourceNotFoundError) as ei:
        dispatcher.execute("watermark", video, WatermarkOptions(output="w.mp4", type="image", image=str(tmp_path / "logo.png")))
    assert ei.value.path.endswith("logo.png")
    assert runner.calls == []

    (tmp_path / "logo.png").write_bytes(b"png")
    dispatcher.execute("watermark", video, WatermarkOptions(output="w.mp4", type="image", image=str(tmp_path / "logo.png")))
    assert "-filter_complex" in runner.last_args


def test_execution_failure_carries_diagnostics(dispatcher, runner, video, caplog):
    runner.succeeded = False
    runner.exit_code = 234
    runner.stderr = b"Unknown encoder 'libfoo'"

    with caplog.at_level(logging.WARNING, logger="hexvideo"):
        with pytest.raises(ExecutionError) as ei:
            dispatcher.execute("convert", video, ConvertOptions(output="o.mp4", codec="libfoo"))

    err = ei.value
    assert err.diagnostics == "Unknown encoder 'libfoo'"
    assert err.exit_code == 234
    assert str(err) == "FFmpeg processing failed: Unknown encoder 'libfoo'"
    assert any("ffmpeg exited with 234" in r.getMessage() for r in caplog.records)


# ---- merge --------------------------------------------------------------------------
def _make_inputs(tmp_path, names):
    paths = []
    for n in names:
        p = tmp_path / n
        p.write_bytes(b"x")
        paths.append(str(p))
    return paths


def test_merge_writes_list_in_order_and_removes_it(dispatcher, runner, file_store, tmp_path):
    inputs = _make_inputs(tmp_path, ["b.mp4", "a.mp4", "c.mp4"])
    seen = {}

    def _inspect(_exe, args):
        list_file = Path(args[args.index("-i") + 1])
        seen["list"] = list_file
        seen["content"] = list_file.read_text(encoding="utf-8")

    runner.on_run = _inspect
    assert dispatcher.execute("merge", None, MergeOptions(output="all.mp4", inputs=tuple(inputs))) is None

    assert seen["content"] == "\n".join(f"file '{p}'" for p in inputs)
    assert seen["list"].suffix == ".txt"
    assert not seen["list"].exists()
    assert runner.last_args[:4] == ["-f", "concat", "-safe", "0"]
    assert runner.last_args[-2:] == ["-y", "all.mp4"]


def test_merge_list_removed_when_ffmpeg_fails(dispatcher, runner, file_store, tmp_path):
    inputs = _make_inputs(tmp_path, ["a.mp4", "b.mp4"])
    runner.succeeded = False
    runner.stderr = b"Impossible to open 'a.mp4'"

    with pytest.raises(ExecutionError):
        dispatcher.execute("merge", None, {"output": "all.mp4", "inputs": inputs})
    assert _temp_files(file_store) == []


def test_merge_missing_input(dispatcher, runner, tmp_path):
    inputs = _make_inputs(tmp_path, ["a.mp4"]) + [str(tmp_path / "missing.mp4")]
    with pytest.raises(SourceNotFoundError) as ei:
        dispatcher.execute("merge", None, MergeOptions(output="all.mp4", inputs=tuple(inputs)))
    assert ei.value.path.endswith("missing.mp4")
    assert runner.calls == []


def test_merge_single_input_rejected(dispatcher, runner, tmp_path):
    inputs = _make_inputs(tmp_path, ["a.mp4"])
    with pytest.raises(InvalidOptionsError):
        dispatcher.execute("merge", None, MergeOptions(output="all.mp4", inputs=tuple(inputs)))
    assert runner.calls == []


# ---- cleanup ------------------------------------------------------------------------
class _StickyStore:
    """Delegates to a real store but refuses to delete anything."""

    def __init__(self, inner):
        self.inner = inner

    def __getattr__(self, name):
        return getattr(self.inner, name)

    def remove_file(self, path):
        raise PermissionError(f"locked: {path}")


def test_cleanup_failure_is_logged_not_raised(runner, file_store, sample_banner, caplog):
    runner.stderr = sample_banner.encode()
    d = OperationDispatcher(runner=runner, files=_StickyStore(file_store))

    with caplog.at_level(logging.WARNING, logger="hexvideo"):
        info = d.execute("info", b"abc")

    assert info.codec == "h264"
    assert any("Could not remove temp file" in r.getMessage() for r in caplog.records)


def test_custom_binary_is_used(runner, file_store, video):
    d = OperationDispatcher(runner=runner, files=file_store, ffmpeg_bin="/usr/local/bin/ffmpeg")
    d.execute("thumbnail", video, ThumbnailOptions(output="t.png"))
    assert runner.calls[0][0] == "/usr/local/bin/ffmpeg"


def test_only_read_only_kind_returns_media_info(dispatcher, runner, video, sample_banner):
    runner.stderr = sample_banner.encode()
    for kind in OperationKind:
        if kind.mutating:
            continue
        assert isinstance(dispatcher.execute(kind, video), MediaInfo)
