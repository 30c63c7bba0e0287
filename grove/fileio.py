"""File I/O for the snapshot and profile: tolerant reads, atomic locked writes."""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any

import yaml


def read_text(path: Path) -> str | None:
    """Return the file's text, or None when it does not exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


def _read_document(path: Path, loads: Callable[[str], Any]) -> Any:
    text = read_text(path)
    if text is None or not text.strip():
        return None
    return loads(text)


def read_json(path: Path) -> Any:
    """Parse a JSON document; None if missing or blank.

    Decoding errors propagate as ``json.JSONDecodeError``.
    """
    return _read_document(path, json.loads)


def read_yaml(path: Path) -> dict[str, Any]:
    """Parse a YAML mapping; anything else (or nothing) reads as {}."""
    data = _read_document(path, yaml.safe_load)
    return data if isinstance(data, dict) else {}


@contextmanager
def replacing(path: Path) -> Iterator[IO[str]]:
    """Yield a locked temp file in *path*'s directory, swapped into place on exit.

    Readers see the old file or the new one, never a partial write. The temp
    file is removed if the body raises.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}_", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            yield f
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def write_json_atomic(path: Path, data: dict[str, Any]) -> None:
    """Serialize first, then swap the file in; a bad payload never touches disk."""
    payload = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    with replacing(path) as f:
        f.write(payload)
