# tests/services/conftest.py
from __future__ import annotations
import pytest
from starlette.testclient import TestClient

from hexvideo.services.api.app import create_app
from hexvideo.services.api.deps import get_video_processor
from hexvideo.services.ffmpeg.processor import FFmpegProcessor


@pytest.fixture()
def processor(dispatcher) -> FFmpegProcessor:
    return FFmpegProcessor(dispatcher)


@pytest.fixture()
def api_client(processor):
    """
    A TestClient whose `get_video_processor` dependency is overridden to hand
    out a processor wired to the recording fake runner, so no ffmpeg is spawned.
    """
    app = create_app()
    app.dependency_overrides[get_video_processor] = lambda: processor

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
