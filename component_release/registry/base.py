# component_release/registry/base.py
"""Package registry abstract base class"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..api.exceptions import PackageNotFoundError, RegistryRejectionError
from ..constants import (
    DEFAULT_REGISTRY_NAME,
    MAX_PACKAGE_NAME_LENGTH,
    MSG_DUPLICATE_VERSION,
    MSG_INVALID_NAME,
    REGISTRY_SCOPED_NAME_PATTERN,
    URL_SAFE_SEGMENT_PATTERN,
)
from ..models.manifest import PackageArtifact
from ..utils.hash_utils import verify_checksum
from ..utils.version_utils import sort_versions

RESERVED_NAMES = {"node_modules", "favicon.ico"}


def is_valid_registry_name(name: str) -> bool:
    """
    Registry package name rules

    A name is ``name`` or ``@scope/name``; every part is lowercase and
    URL-safe, does not start with ``.`` or ``_``, and the whole name is at
    most 214 characters.
    """
    if not name or name != name.strip() or len(name) > MAX_PACKAGE_NAME_LENGTH:
        return False
    if name.lower() in RESERVED_NAMES:
        return False

    match = REGISTRY_SCOPED_NAME_PATTERN.match(name)
    parts = [match.group(1), match.group(2)] if match else [name]

    for part in parts:
        if not URL_SAFE_SEGMENT_PATTERN.match(part):
            return False
        if part.startswith((".", "_")):
            return False
    return True


class RegistryBackend(ABC):
    """Abstract base class for package registries

    Packages are keyed by ``name@version`` and immutable once pushed.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize registry backend

        Args:
            config: Backend-specific configuration
        """
        self.config = config or {}
        self.name = self.config.get("name", DEFAULT_REGISTRY_NAME)
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize registry backend (e.g., create directories)"""
        if not self._initialized:
            await self._do_initialize()
            self._initialized = True

    async def _do_initialize(self) -> None:
        """Actual initialization logic to be implemented by subclasses"""
        pass

    def validate_name(self, package_name: str) -> None:
        """
        Apply the registry's name rules

        Raises:
            RegistryRejectionError: With the registry message ``Invalid name: "<name>"``
        """
        if not is_valid_registry_name(package_name):
            raise RegistryRejectionError(MSG_INVALID_NAME.format(name=package_name), package_name)

    async def push(self, artifact: PackageArtifact) -> str:
        """
        Publish a package version

        Args:
            artifact: Package to publish

        Returns:
            ``name@version`` of the stored package

        Raises:
            RegistryRejectionError: If the name is invalid, the version already
                exists or the payload does not match its checksum
        """
        await self.initialize()
        self.validate_name(artifact.package_name)

        if not verify_checksum(artifact.payload, artifact.checksum):
            raise RegistryRejectionError(
                f"Checksum mismatch for {artifact.spec}", artifact.package_name
            )

        if await self.exists(artifact.package_name, artifact.version):
            raise RegistryRejectionError(
                MSG_DUPLICATE_VERSION.format(version=artifact.version), artifact.package_name
            )

        await self._store(artifact)
        return artifact.spec

    async def fetch(self, package_name: str, version: str) -> PackageArtifact:
        """
        Retrieve a package version

        Raises:
            PackageNotFoundError: If the version was never published
        """
        await self.initialize()
        artifact = await self._load(package_name, version)
        if artifact is None:
            raise PackageNotFoundError(package_name, version)
        return artifact

    async def exists(self, package_name: str, version: str) -> bool:
        """Check if a package version is published"""
        await self.initialize()
        return version in await self._list_versions(package_name)

    async def versions(self, package_name: str) -> List[str]:
        """Published versions of a package, lowest first"""
        await self.initialize()
        return sort_versions(await self._list_versions(package_name))

    @abstractmethod
    async def _store(self, artifact: PackageArtifact) -> None:
        """Persist a validated artifact"""
        pass

    @abstractmethod
    async def _load(self, package_name: str, version: str) -> Optional[PackageArtifact]:
        """Read an artifact, None if absent"""
        pass

    @abstractmethod
    async def _list_versions(self, package_name: str) -> List[str]:
        """Versions stored for a package"""
        pass

    async def close(self) -> None:
        """Close registry connections"""
        if self._initialized:
            await self._do_close()
            self._initialized = False

    async def _do_close(self) -> None:
        """Actual cleanup logic to be implemented by subclasses"""
        pass

    async def __aenter__(self):
        """Async context manager entry"""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

    def get_display_info(self) -> str:
        """Short description for output"""
        return f"{self.__class__.__name__}({self.name})"
