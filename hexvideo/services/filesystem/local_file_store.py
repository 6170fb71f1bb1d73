# hexvideo/services/filesystem/local_file_store.py
from __future__ import annotations

import secrets
import shutil
import tempfile
import threading
import time
import weakref
from pathlib import Path
from typing import Optional

from hexvideo.domain.ports.files import FileStorePort


class LocalFileStore(FileStorePort):
    """
    Local filesystem implementation for FileStorePort.
    Temp names combine a nanosecond timestamp with random bytes and are
    created exclusively, so concurrent calls never share a file.

    Without a temp_dir the store makes its own `hexvideo_*` directory on first
    use and removes it on cleanup(), when the store is collected, or at exit.
    A caller-supplied temp_dir is never removed.
    """

    def __init__(self, temp_dir: Optional[Path | str] = None) -> None:
        self._temp_dir = Path(temp_dir) if temp_dir else None
        self._lock = threading.Lock()
        self._finalizer: Optional[weakref.finalize] = None

    @property
    def temp_dir(self) -> Path:
        if self._temp_dir is None:
            with self._lock:
                if self._temp_dir is None:
                    d = Path(tempfile.mkdtemp(prefix="hexvideo_"))
                    self._finalizer = weakref.finalize(self, shutil.rmtree, d, ignore_errors=True)
                    self._temp_dir = d
        return self._temp_dir

    def cleanup(self) -> None:
        """Remove the directory this store created for itself, if any."""
        with self._lock:
            if self._finalizer is None:
                return
            self._finalizer()
            self._finalizer = None
            self._temp_dir = None

    def create_temp_file(self, suffix: str = "") -> str:
        d = self.temp_dir
        d.mkdir(parents=True, exist_ok=True)
        while True:
            p = d / f"temp_{time.time_ns()}_{secrets.token_hex(4)}{suffix}"
            try:
                with p.open("xb"):
                    return str(p)
            except FileExistsError:
                continue

    def write_bytes(self, path: str, data: bytes) -> None:
        Path(path).write_bytes(data)

    def write_text(self, path: str, text: str) -> None:
        Path(path).write_text(text, encoding="utf-8")

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def remove_file(self, path: str) -> None:
        Path(path).unlink(missing_ok=True)

    def stat_size(self, path: str) -> int:
        return Path(path).stat().st_size

    def exists(self, path: str) -> bool:
        return Path(path).is_file()
