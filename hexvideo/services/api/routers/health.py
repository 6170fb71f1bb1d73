# hexvideo/services/api/routers/health.py
from __future__ import annotations
from fastapi import APIRouter
from hexvideo.common.settings import get_settings
from hexvideo.services.ffmpeg.toolcheck import check_ffmpeg
from hexvideo.services.process.subprocess_runner import SubprocessRunner

router = APIRouter()

@router.get("/healthz")
def healthz():
    s = get_settings()
    return {
        "ok": True,
        "app": s.app_name,
        "env": s.app_env,
        "ffmpeg_bin": s.ffmpeg.bin,
    }


@router.get("/healthz/ffmpeg")
def healthz_ffmpeg():
    # runs `<bin> -version`; never installs anything
    s = get_settings()
    available = check_ffmpeg(SubprocessRunner(timeout_sec=s.ffmpeg.timeout_sec), s.ffmpeg.bin)
    return {"ok": available, "ffmpeg_bin": s.ffmpeg.bin}
