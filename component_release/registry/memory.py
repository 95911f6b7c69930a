"""In-memory package registry"""

from typing import Any, ClassVar, Dict, List, Optional, Tuple

from .base import RegistryBackend
from ..models.manifest import PackageArtifact, PackageManifest


class MemoryRegistry(RegistryBackend):
    """Registry kept in process memory

    Registries created through ``shared`` with the same name share their
    packages, so several workspaces in one process see the same registry.
    """

    _shared: ClassVar[Dict[str, 'MemoryRegistry']] = {}

    def __init__(self, config: Dict[str, Any] = None):
        super().__init__(config)
        self._packages: Dict[Tuple[str, str], Tuple[Dict[str, Any], bytes, str]] = {}

    @classmethod
    def shared(cls, name: str) -> 'MemoryRegistry':
        """Process-wide registry instance for ``name``"""
        if name not in cls._shared:
            cls._shared[name] = cls({"name": name})
        return cls._shared[name]

    @classmethod
    def reset_shared(cls) -> None:
        """Forget all shared registries"""
        cls._shared.clear()

    async def _store(self, artifact: PackageArtifact) -> None:
        key = (artifact.package_name, artifact.version)
        self._packages[key] = (artifact.manifest.to_dict(), bytes(artifact.payload), artifact.checksum)

    async def _load(self, package_name: str, version: str) -> Optional[PackageArtifact]:
        entry = self._packages.get((package_name, version))
        if entry is None:
            return None
        manifest, payload, checksum = entry
        return PackageArtifact(
            package_name=package_name,
            version=version,
            manifest=PackageManifest.from_dict(manifest),
            payload=payload,
            checksum=checksum,
        )

    async def _list_versions(self, package_name: str) -> List[str]:
        return [version for name, version in self._packages if name == package_name]

    def __len__(self) -> int:
        return len(self._packages)
