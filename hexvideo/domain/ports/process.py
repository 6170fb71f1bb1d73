from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence


@dataclass(frozen=True)
class ProcessResult:
    succeeded: bool
    exit_code: int
    stdout: bytes = b""
    stderr: bytes = b""


class ProcessRunnerPort(Protocol):
    def run(
        self,
        executable: str,
        args: Sequence[str],
        *,
        capture_stdout: bool = True,
        capture_stderr: bool = True,
    ) -> ProcessResult: ...
