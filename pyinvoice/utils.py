from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator
import os
import re

from filelock import FileLock


@contextmanager
def excel_lock(path: str, timeout: int = 10) -> Iterator[None]:
    """Acquire a lock for exclusive access to an Excel file."""
    lock = FileLock(f"{path}.lock", timeout=timeout)
    with lock:
        yield


_INVALID_CHARS = re.compile(r'[\x00-\x1f*?:"<>|]')


def upload_name(filename: str | None, max_length: int = 100) -> str:
    """Return a printable name for an uploaded file.

    Browsers may send a full client path (``C:\\scans\\a.pdf``); only the last
    component is kept. Empty names become ``upload.pdf``.
    """
    name = re.split(r"[\\/]", filename or "")[-1]
    name = re.sub(r"\s+", " ", name.strip())
    name = _INVALID_CHARS.sub("_", name)
    if not name:
        return "upload.pdf"
    if len(name) > max_length:
        base, ext = os.path.splitext(name)
        name = base[: max_length - len(ext)] + ext
    return name
