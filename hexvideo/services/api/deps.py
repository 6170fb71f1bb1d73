# hexvideo/services/api/deps.py
from __future__ import annotations

from hexvideo.domain.ports.video import VideoProcessorPort
from hexvideo.services.ffmpeg.processor import get_default_processor


def get_video_processor() -> VideoProcessorPort:
    """
    Provide a VideoProcessorPort implementation (ffmpeg) via DI.
    The shared default is created lazily on the first request, without
    attempting a package-manager install inside the request; a missing
    ffmpeg answers 503 with install guidance instead.
    Tests swap it through app.dependency_overrides.
    """
    return get_default_processor(auto_install=False)
