from __future__ import annotations
from typing import Protocol

class FileStorePort(Protocol):
    def create_temp_file(self, suffix: str = "") -> str: ...
    def write_bytes(self, path: str, data: bytes) -> None: ...
    def write_text(self, path: str, text: str) -> None: ...
    def read_bytes(self, path: str) -> bytes: ...
    def remove_file(self, path: str) -> None: ...   # idempotent
    def stat_size(self, path: str) -> int: ...
    def exists(self, path: str) -> bool: ...
