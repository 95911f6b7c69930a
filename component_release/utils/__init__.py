# component_release/utils/__init__.py
"""Utility functions for component-release"""

from .file_utils import (
    ensure_directory,
    iter_files,
    atomic_write_bytes,
    atomic_write_json,
    read_json,
)

from .version_utils import (
    parse_version,
    suggest_version,
    compare_versions,
    is_valid_version,
    is_greater,
    sort_versions,
)

from .hash_utils import (
    hash_bytes,
    snapshot_hash,
    verify_checksum,
)

from .async_utils import run_async

__all__ = [
    "ensure_directory",
    "iter_files",
    "atomic_write_bytes",
    "atomic_write_json",
    "read_json",
    "parse_version",
    "suggest_version",
    "compare_versions",
    "is_valid_version",
    "is_greater",
    "sort_versions",
    "hash_bytes",
    "snapshot_hash",
    "verify_checksum",
    "run_async",
]
