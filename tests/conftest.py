# tests/conftest.py
from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple
import pytest

from hexvideo.common import settings as settings_mod
from hexvideo.domain.ports.process import ProcessResult
from hexvideo.services.ffmpeg import processor as processor_mod
from hexvideo.services.ffmpeg.dispatcher import OperationDispatcher
from hexvideo.services.filesystem.local_file_store import LocalFileStore

SAMPLE_BANNER = """\
Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'clip.mp4':
  Metadata:
    major_brand     : isom
  Duration: 00:00:20.04, start: 0.000000, bitrate: 5123 kb/s
  Stream #0:0[0x1](und): Video: h264 (High) (avc1 / 0x31637661), yuv420p(progressive), 1920x1080 [SAR 1:1 DAR 16:9], 4997 kb/s, 29.97 fps, 29.97 tbr, 30k tbn (default)
  Stream #0:1[0x2](und): Audio: aac (LC) (mp4a / 0x6134706D), 44100 Hz, stereo, fltp, 128 kb/s (default)
"""


class _FakeRunner:
    """Records every run() call and answers with a canned ProcessResult."""

    def __init__(self, succeeded: bool = True, stderr: bytes = b"", exit_code: Optional[int] = None):
        self.calls: List[Tuple[str, List[str], Dict[str, bool]]] = []
        self.succeeded = succeeded
        self.stderr = stderr
        self.exit_code = exit_code if exit_code is not None else (0 if succeeded else 1)
        self.on_run = None  # optional hook(executable, args)

    def run(self, executable: str, args: Sequence[str], *, capture_stdout: bool = True, capture_stderr: bool = True):
        self.calls.append((executable, list(args), {"stdout": capture_stdout, "stderr": capture_stderr}))
        if self.on_run is not None:
            self.on_run(executable, list(args))
        return ProcessResult(succeeded=self.succeeded, exit_code=self.exit_code, stdout=b"", stderr=self.stderr)

    @property
    def last_args(self) -> List[str]:
        return self.calls[-1][1]


@pytest.fixture(autouse=True)
def _fresh_state(monkeypatch, tmp_path):
    # isolated settings and no shared processor leaking between tests
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("HEXVIDEO_TEMP_DIR", str(tmp_path / "tmp"))
    settings_mod.get_settings.cache_clear()
    processor_mod.reset_default_processor()
    yield
    processor_mod.reset_default_processor()
    settings_mod.get_settings.cache_clear()


@pytest.fixture()
def runner() -> _FakeRunner:
    return _FakeRunner()


@pytest.fixture()
def file_store(tmp_path) -> LocalFileStore:
    return LocalFileStore(tmp_path / "tmp")


@pytest.fixture()
def dispatcher(runner, file_store) -> OperationDispatcher:
    return OperationDispatcher(runner=runner, files=file_store, ffmpeg_bin="ffmpeg")


@pytest.fixture()
def video(tmp_path):
    f = tmp_path / "clip.mp4"
    f.write_bytes(b"\x00" * 2048)
    return f


@pytest.fixture()
def sample_banner() -> str:
    return SAMPLE_BANNER
