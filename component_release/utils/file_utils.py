"""File operation utilities"""

import fnmatch
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional


def ensure_directory(path: Path) -> Path:
    """
    Ensure directory exists

    Args:
        path: Directory path

    Returns:
        The same path
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def should_exclude(relative_path: str, patterns: List[str]) -> bool:
    """
    Check whether a relative path matches an exclude pattern

    Patterns ending with ``/`` exclude a directory at any depth.
    """
    parts = relative_path.split("/")
    for pattern in patterns:
        if pattern.endswith("/"):
            if pattern.rstrip("/") in parts[:-1]:
                return True
        elif fnmatch.fnmatch(parts[-1], pattern):
            return True
    return False


def iter_files(root: Path, exclude_patterns: Optional[List[str]] = None) -> Iterator[str]:
    """
    Yield POSIX relative paths of files under ``root`` in sorted order

    Args:
        root: Directory to walk
        exclude_patterns: Glob patterns to skip
    """
    exclude_patterns = exclude_patterns or []
    if not root.is_dir():
        return

    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        relative = path.relative_to(root).as_posix()
        if should_exclude(relative, exclude_patterns):
            continue
        yield relative


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """
    Write a file atomically: temp file in the same directory, then replace

    Args:
        path: Target file
        data: Content
    """
    ensure_directory(path.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def atomic_write_json(path: Path, data: Dict[str, Any]) -> None:
    """Serialize ``data`` as pretty JSON and write it atomically"""
    content = json.dumps(data, indent=2, ensure_ascii=False, sort_keys=False)
    atomic_write_bytes(path, (content + "\n").encode("utf-8"))


def read_json(path: Path) -> Optional[Dict[str, Any]]:
    """Read a JSON file, returning None when it does not exist"""
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
