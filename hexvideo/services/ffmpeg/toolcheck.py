# hexvideo/services/ffmpeg/toolcheck.py
from __future__ import annotations

import platform
import shutil
from typing import Optional

from hexvideo.common.logging import get_logger
from hexvideo.domain.errors import ToolUnavailableError, VideoError
from hexvideo.domain.ports.process import ProcessRunnerPort
from hexvideo.services.process.subprocess_runner import SubprocessRunner

logger = get_logger()

FFMPEG_DOWNLOAD_URL = "https://ffmpeg.org/download.html"
_RULE = "━" * 52


def detect_os() -> str:
    """macos|linux|windows|unknown"""
    name = platform.system().lower()
    if name == "darwin":
        return "macos"
    if name in ("linux", "windows"):
        return name
    return "unknown"


def check_ffmpeg(runner: ProcessRunnerPort, ffmpeg_bin: str = "ffmpeg") -> bool:
    """True when `<ffmpeg_bin> -version` runs and exits 0."""
    try:
        return runner.run(ffmpeg_bin, ["-version"]).succeeded
    except VideoError:
        return False


def _linux_install_command() -> str:
    if shutil.which("apt-get"):
        return "sudo apt-get install -y ffmpeg"
    if shutil.which("yum"):
        return "sudo yum install -y ffmpeg"
    return "Install FFmpeg with your distribution's package manager"


def install_hint(os_name: Optional[str] = None) -> str:
    """Remediation text shown when ffmpeg is missing."""
    os_name = os_name or detect_os()
    lines = ["", _RULE, "  FFmpeg is not installed or could not be found", _RULE, ""]

    if os_name == "macos":
        cmd = "brew install ffmpeg"
        lines += [
            "Automatic install (recommended):",
            f"   {cmd}",
            "",
            "Manual install:",
            "   1. Make sure Homebrew is installed (https://brew.sh)",
            f"   2. Run: {cmd}",
            "",
        ]
    elif os_name == "linux":
        lines += [
            "Install command:",
            f"   {_linux_install_command()}",
            "",
            "   Or with another package manager:",
            "   • Arch: sudo pacman -S ffmpeg",
            "   • Fedora: sudo dnf install ffmpeg",
            "",
        ]
    elif os_name == "windows":
        lines += [
            "Install steps:",
            f"   1. Visit: {FFMPEG_DOWNLOAD_URL}",
            "   2. Download a Windows build",
            "   3. Extract it and add the bin folder to PATH",
            "   4. Make sure ffmpeg.exe is available on PATH",
            "",
        ]
    else:
        lines += ["Install command:", "   Install FFmpeg for your operating system", ""]

    lines += ["Once installed, run the program again.", _RULE, ""]
    return "\n".join(lines)


def try_auto_install(runner: ProcessRunnerPort, os_name: Optional[str] = None) -> bool:
    """
    Only macOS with Homebrew is attempted; Linux needs root and Windows
    needs a manual download, so both just log and return False.
    """
    os_name = os_name or detect_os()
    if os_name == "linux":
        logger.info("Linux needs administrator rights; install ffmpeg manually (see hint).")
        return False
    if os_name == "windows":
        logger.info("Windows needs a manual ffmpeg download (see hint).")
        return False
    if os_name != "macos":
        return False

    try:
        if not runner.run("brew", ["--version"]).succeeded:
            logger.info("Homebrew not found; cannot install ffmpeg automatically")
            return False
        logger.info("Homebrew found, installing ffmpeg (this can take a few minutes)...")
        res = runner.run("brew", ["install", "ffmpeg"], capture_stdout=False, capture_stderr=False)
    except VideoError as e:
        logger.warning("Automatic ffmpeg install failed: %s", e)
        return False

    if res.succeeded:
        logger.info("ffmpeg installed")
        return True
    logger.warning("Automatic ffmpeg install failed (exit code %s)", res.exit_code)
    return False


def ensure_ffmpeg(
    ffmpeg_bin: Optional[str] = None,
    auto_install: bool = True,
    runner: Optional[ProcessRunnerPort] = None,
) -> str:
    """Return a runnable ffmpeg command or raise ToolUnavailableError with install guidance."""
    command = ffmpeg_bin or "ffmpeg"
    runner = runner or SubprocessRunner()

    if check_ffmpeg(runner, command):
        return command

    if auto_install:
        logger.info("ffmpeg not found, trying automatic install...")
        if try_auto_install(runner):
            if check_ffmpeg(runner, command):
                return command
            logger.warning(
                "ffmpeg was installed but is not usable in this session; refresh PATH or restart the terminal."
            )

    raise ToolUnavailableError(f"FFmpeg not found ({command}).", hint=install_hint())
