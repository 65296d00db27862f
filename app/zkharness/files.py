# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
import json
import os
import shutil
import tempfile

from pathlib import Path
from typing import Any


def load_string(path: str | Path) -> str:
    """
    Read a UTF-8 text file.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    path = Path(path)
    # keep line endings as they are on disk
    with path.open("r", encoding="utf-8", newline="") as f:
        return f.read()


def save_string(path: str | Path, string: str) -> None:
    """
    Atomically write a UTF-8 string to a file, creating parent directories.

    The text is written to a temporary file next to `path` and moved over it
    with `os.replace`, so readers see either the old or the new content.
    An existing file keeps its permission bits.
    The temporary file is removed if anything fails before the move.

    Args:
        path: Destination file path (string or `Path`).
        string: Text content to write.

    Raises:
        OSError: If the file cannot be created, written or replaced.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(string)
        if path.exists():
            shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except BaseException:
        os.unlink(tmp)
        raise


def save_json(path: str | Path, data: Any) -> None:
    """
    Serialize data as JSON and write it to a file.

    Args:
        path: Destination file path (string or `Path`).
        data: Any JSON-serializable Python object.

    Raises:
        TypeError: If `data` contains non-JSON-serializable objects.
        OSError: If the file cannot be created or written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_json(path: str | Path) -> Any:
    """
    Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)
