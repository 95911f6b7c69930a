"""Filesystem package registry"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles

from .base import RegistryBackend, is_valid_registry_name
from ..constants import DEFAULT_CHUNK_SIZE, REGISTRY_MANIFEST_FILE, REGISTRY_PAYLOAD_FILE
from ..models.manifest import PackageArtifact, PackageManifest

logger = logging.getLogger(__name__)


class FilesystemRegistry(RegistryBackend):
    """Registry stored in a local directory

    Layout: ``<path>/<package name>/<version>/manifest.json`` plus
    ``package.tgz``. A version counts as published once its
    ``manifest.json`` exists, which is written last.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize filesystem registry

        Args:
            config: Configuration including:
                - path: Registry root directory
                - name: Registry name
        """
        super().__init__(config)
        path = self.config.get("path")
        if not path:
            raise ValueError("Filesystem registry requires 'path'")
        self.base_path = Path(path)

    async def _do_initialize(self) -> None:
        """Ensure the registry directory exists"""
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _version_dir(self, package_name: str, version: str) -> Path:
        return self.base_path / package_name / version

    async def _store(self, artifact: PackageArtifact) -> None:
        target = self._version_dir(artifact.package_name, artifact.version)
        target.mkdir(parents=True, exist_ok=True)

        async with aiofiles.open(target / REGISTRY_PAYLOAD_FILE, 'wb') as f:
            for offset in range(0, len(artifact.payload), DEFAULT_CHUNK_SIZE):
                await f.write(artifact.payload[offset:offset + DEFAULT_CHUNK_SIZE])

        record = {
            "manifest": artifact.manifest.to_dict(),
            "checksum": artifact.checksum,
            "size": artifact.size,
            "published_at": datetime.now(timezone.utc).isoformat(),
        }
        async with aiofiles.open(target / REGISTRY_MANIFEST_FILE, 'w', encoding='utf-8') as f:
            await f.write(json.dumps(record, indent=2))

        logger.debug(f"Stored {artifact.spec} in {target}")

    async def _load(self, package_name: str, version: str) -> Optional[PackageArtifact]:
        if not is_valid_registry_name(package_name):
            return None

        source = self._version_dir(package_name, version)
        manifest_path = source / REGISTRY_MANIFEST_FILE
        if not manifest_path.exists():
            return None

        async with aiofiles.open(manifest_path, 'r', encoding='utf-8') as f:
            record = json.loads(await f.read())
        async with aiofiles.open(source / REGISTRY_PAYLOAD_FILE, 'rb') as f:
            payload = await f.read()

        return PackageArtifact(
            package_name=package_name,
            version=version,
            manifest=PackageManifest.from_dict(record["manifest"]),
            payload=payload,
            checksum=record["checksum"],
        )

    async def _list_versions(self, package_name: str) -> List[str]:
        if not is_valid_registry_name(package_name):
            return []

        package_dir = self.base_path / package_name
        if not package_dir.is_dir():
            return []

        return [
            entry.name for entry in package_dir.iterdir()
            if (entry / REGISTRY_MANIFEST_FILE).is_file()
        ]

    def get_display_info(self) -> str:
        return f"Filesystem: {self.base_path}"
