# hexvideo/services/process/subprocess_runner.py
from __future__ import annotations

import subprocess
from typing import Optional, Sequence

from hexvideo.common.logging import get_logger
from hexvideo.domain.errors import ExecutionError, ToolUnavailableError
from hexvideo.domain.ports.process import ProcessResult, ProcessRunnerPort

logger = get_logger()


class SubprocessRunner(ProcessRunnerPort):
    """
    Infrastructure adapter implementing ProcessRunnerPort with `subprocess.run`.
    Blocks until the process exits; safe to call from many threads at once.
    """

    def __init__(self, timeout_sec: Optional[int] = None):
        self.timeout_sec = timeout_sec

    def run(
        self,
        executable: str,
        args: Sequence[str],
        *,
        capture_stdout: bool = True,
        capture_stderr: bool = True,
    ) -> ProcessResult:
        cmd = [executable, *args]
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE if capture_stdout else None,
                stderr=subprocess.PIPE if capture_stderr else None,
                stdin=subprocess.DEVNULL,
                timeout=self.timeout_sec,
                check=False,  # we hand rc back to the caller with stderr attached
            )
        except FileNotFoundError as e:
            raise ToolUnavailableError(f"{executable} not found") from e
        except PermissionError as e:
            raise ToolUnavailableError(f"{executable} is not executable") from e
        except subprocess.TimeoutExpired as e:
            stderr = e.stderr.decode("utf-8", errors="replace") if isinstance(e.stderr, bytes) else (e.stderr or "")
            raise ExecutionError(
                f"{executable} timed out after {self.timeout_sec}s",
                diagnostics=stderr,
            ) from e
        except OSError as e:
            raise ToolUnavailableError(f"Failed to execute {executable} (OS error): {e}") from e

        return ProcessResult(
            succeeded=proc.returncode == 0,
            exit_code=proc.returncode,
            stdout=proc.stdout or b"",
            stderr=proc.stderr or b"",
        )
