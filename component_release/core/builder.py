# component_release/core/builder.py
"""Dist payload builders and package tarballs"""

import gzip
import io
import json
import logging
import tarfile
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import Dict, List

from ..api.exceptions import ComponentReleaseError
from ..constants import DIST_DIR, PACKAGE_MANIFEST_FILE, PACKAGE_ROOT_DIR
from ..models.component import Tag
from ..models.manifest import PackageManifest
from ..utils.file_utils import ensure_directory

logger = logging.getLogger(__name__)

FILE_MODE = 0o644


class Builder(ABC):
    """Produces the dist payload of a tagged component"""

    @abstractmethod
    def build(self, tag: Tag, files: Dict[str, bytes]) -> Dict[str, bytes]:
        """
        Build dist files from a tag snapshot

        Args:
            tag: Tag being published
            files: Snapshot content, path -> bytes

        Returns:
            Dist content keyed by path relative to ``dist/``
        """
        pass

    def main_entry(self, tag: Tag) -> str:
        """Entry point of the built payload, relative to ``dist/``"""
        return tag.main


class CopyBuilder(Builder):
    """Ships the tagged sources unchanged as the dist payload"""

    def build(self, tag: Tag, files: Dict[str, bytes]) -> Dict[str, bytes]:
        return dict(files)


def _add_member(archive: tarfile.TarFile, name: str, data: bytes) -> None:
    info = tarfile.TarInfo(name=name)
    info.size = len(data)
    info.mtime = 0
    info.mode = FILE_MODE
    info.uid = info.gid = 0
    info.uname = info.gname = ""
    archive.addfile(info, io.BytesIO(data))


def pack_tarball(manifest: PackageManifest, dist_files: Dict[str, bytes]) -> bytes:
    """
    Pack a package tarball

    The layout is ``package/package.json`` plus ``package/dist/<file>``.
    Members are sorted and carry no timestamps or owners, so identical
    inputs always give identical bytes.

    Args:
        manifest: Package manifest
        dist_files: Built files keyed by path relative to ``dist/``

    Returns:
        Gzipped tar payload
    """
    raw = io.BytesIO()
    with tarfile.open(fileobj=raw, mode="w", format=tarfile.PAX_FORMAT) as archive:
        manifest_bytes = (json.dumps(manifest.to_dict(), indent=2) + "\n").encode("utf-8")
        _add_member(archive, f"{PACKAGE_ROOT_DIR}/{PACKAGE_MANIFEST_FILE}", manifest_bytes)
        for path in sorted(dist_files):
            _add_member(archive, f"{PACKAGE_ROOT_DIR}/{DIST_DIR}/{path}", dist_files[path])

    compressed = io.BytesIO()
    with gzip.GzipFile(fileobj=compressed, mode="wb", mtime=0) as gz:
        gz.write(raw.getvalue())
    return compressed.getvalue()


def read_tarball(payload: bytes) -> Dict[str, bytes]:
    """
    Read every file of a package tarball

    Returns:
        Content keyed by path relative to the ``package/`` root

    Raises:
        ComponentReleaseError: If the payload is not a valid package tarball
    """
    files = {}
    try:
        with tarfile.open(fileobj=io.BytesIO(payload), mode="r:gz") as archive:
            for member in archive.getmembers():
                if not member.isfile():
                    continue
                path = PurePosixPath(member.name)
                if path.is_absolute() or ".." in path.parts or path.parts[0] != PACKAGE_ROOT_DIR:
                    raise ComponentReleaseError(f"Illegal path in package tarball: {member.name}")
                relative = PurePosixPath(*path.parts[1:]).as_posix()
                files[relative] = archive.extractfile(member).read()
    except (tarfile.TarError, OSError) as e:
        raise ComponentReleaseError(f"Invalid package tarball: {e}")
    return files


def extract_tarball(payload: bytes, dest: Path) -> List[str]:
    """
    Extract a package tarball into ``dest`` without the ``package/`` prefix

    Returns:
        Extracted relative paths
    """
    files = read_tarball(payload)
    for relative, data in files.items():
        target = dest / relative
        ensure_directory(target.parent)
        target.write_bytes(data)
    logger.debug(f"Extracted {len(files)} file(s) to {dest}")
    return sorted(files)
