"""Hash calculation utilities"""

import hashlib
import json
from typing import Dict


def hash_bytes(data: bytes) -> str:
    """SHA256 hex digest of in-memory content"""
    return hashlib.sha256(data).hexdigest()


def snapshot_hash(files: Dict[str, str], main: str) -> str:
    """
    Hash of a component snapshot

    Args:
        files: Mapping of relative path to content hash
        main: Main file of the component

    Returns:
        Hex digest, stable for identical file sets
    """
    canonical = json.dumps({"files": files, "main": main}, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def verify_checksum(data: bytes, expected_checksum: str) -> bool:
    """
    Verify payload checksum

    Args:
        data: Payload bytes
        expected_checksum: Expected sha256 value

    Returns:
        True if checksum matches
    """
    return hash_bytes(data).lower() == expected_checksum.lower()
