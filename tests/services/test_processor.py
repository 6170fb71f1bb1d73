# tests/services/test_processor.py
from __future__ import annotations

import threading
from pathlib import Path

import pytest

import hexvideo
from hexvideo.domain.dataclasses.options import (
    CompressOptions,
    ConvertOptions,
    CropOptions,
    MergeOptions,
    ThumbnailOptions,
    WatermarkOptions,
)
from hexvideo.domain.errors import ToolUnavailableError
from hexvideo.services.ffmpeg import processor as processor_mod
from hexvideo.services.ffmpeg.processor import FFmpegProcessor, create_video_processor


def test_create_checks_ffmpeg_first(runner, file_store):
    proc = create_video_processor(ffmpeg_bin="ffmpeg7", runner=runner, files=file_store, auto_install=False)
    assert isinstance(proc, FFmpegProcessor)
    assert proc.ffmpeg_bin == "ffmpeg7"
    assert runner.calls[0][:2] == ("ffmpeg7", ["-version"])


def test_create_raises_with_hint_when_ffmpeg_missing(runner, file_store):
    runner.succeeded = False
    with pytest.raises(ToolUnavailableError) as ei:
        create_video_processor(runner=runner, files=file_store, auto_install=False)
    assert "FFmpeg" in ei.value.hint
    # only the -version probe ran
    assert [c[1] for c in runner.calls] == [["-version"]]


def test_create_uses_settings(monkeypatch, runner):
    monkeypatch.setenv("FFMPEG__BIN", "avconv-ish")
    from hexvideo.common import settings as s
    s.get_settings.cache_clear()

    proc = create_video_processor(runner=runner, auto_install=False)
    assert proc.ffmpeg_bin == "avconv-ish"
    assert str(proc.dispatcher.files.temp_dir) == str(s.get_settings().temp_dir)


def test_methods_route_to_operations(runner, file_store, video, sample_banner):
    proc = create_video_processor(runner=runner, files=file_store, auto_install=False)
    runner.stderr = sample_banner.encode()

    info = proc.get_info(video)
    assert info.duration_sec == pytest.approx(20.04)

    assert proc.convert(video, ConvertOptions(output="o.mp4")) is None
    assert proc.compress(video, CompressOptions(output="o.mp4")) is None
    assert proc.crop(video, CropOptions(output="o.mp4", duration=1)) is None
    assert proc.add_watermark(video, WatermarkOptions(output="o.mp4", text="hi")) is None
    assert proc.extract_thumbnail(video, ThumbnailOptions(output="t.jpg")) is None

    firsts = [c[1][:1] for c in runner.calls[1:]]
    assert firsts == [["-i"]] * 6


def test_merge_videos_argument_overrides_inputs(runner, file_store, tmp_path):
    proc = create_video_processor(runner=runner, files=file_store, auto_install=False)
    a, b = tmp_path / "a.mp4", tmp_path / "b.mp4"
    a.write_bytes(b"1")
    b.write_bytes(b"2")
    seen = {}
    runner.on_run = lambda _exe, args: seen.setdefault(
        "content", Path(args[args.index("-i") + 1]).read_text(encoding="utf-8")
    )

    proc.merge([a, b], MergeOptions(output="ab.mp4", inputs=("ignored.mp4",)))
    assert seen["content"] == f"file '{a}'\nfile '{b}'"


def test_default_processor_created_once(monkeypatch, runner, file_store):
    created = []

    def _factory(**kwargs):
        created.append(1)
        return create_video_processor(runner=runner, files=file_store, auto_install=False)

    monkeypatch.setattr(processor_mod, "create_video_processor", _factory)

    results = []
    threads = [threading.Thread(target=lambda: results.append(processor_mod.get_default_processor())) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(created) == 1
    assert all(r is results[0] for r in results)


def test_convenience_functions_use_default(runner, file_store, video, sample_banner):
    runner.stderr = sample_banner.encode()
    hexvideo.set_default_processor(create_video_processor(runner=runner, files=file_store, auto_install=False))

    assert hexvideo.get_video_info(video).codec == "h264"
    hexvideo.extract_thumbnail(video, ThumbnailOptions(output="t.jpg", time=5, width=320))
    assert runner.last_args[-4:] == ["-vf", "scale=320:-1", "-y", "t.jpg"]


def test_reset_default_processor(runner, file_store):
    proc = create_video_processor(runner=runner, files=file_store, auto_install=False)
    processor_mod.set_default_processor(proc)
    assert processor_mod.get_default_processor() is proc
    processor_mod.reset_default_processor()
    assert processor_mod._default_processor is None


def test_default_processor_forwards_auto_install(monkeypatch, runner, file_store):
    seen = []

    def _factory(**kwargs):
        seen.append(kwargs)
        return create_video_processor(runner=runner, files=file_store, auto_install=False)

    monkeypatch.setattr(processor_mod, "create_video_processor", _factory)
    processor_mod.get_default_processor(auto_install=False)
    # already built: later flags are ignored
    processor_mod.get_default_processor(auto_install=True)
    assert seen == [{"auto_install": False}]
