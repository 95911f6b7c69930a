"""Registry backend factory"""

from typing import TYPE_CHECKING, Dict, Optional, Type

from .base import RegistryBackend
from .filesystem import FilesystemRegistry
from .memory import MemoryRegistry
from ..constants import RegistryType
from ..models.config import RegistryTarget

if TYPE_CHECKING:
    from ..core.path_resolver import PathResolver


class RegistryFactory:
    """Factory for creating registry backend instances"""

    _backends: Dict[RegistryType, Type[RegistryBackend]] = {
        RegistryType.FILESYSTEM: FilesystemRegistry,
        RegistryType.MEMORY: MemoryRegistry,
    }

    @classmethod
    def create_from_config(cls,
                           target: RegistryTarget,
                           path_resolver: Optional['PathResolver'] = None) -> RegistryBackend:
        """Create registry backend from its configuration

        Memory registries are shared per name within the process.

        Args:
            target: Registry configuration
            path_resolver: Resolves relative registry paths against the workspace

        Returns:
            Registry backend instance

        Raises:
            ValueError: If registry type is not supported
        """
        registry_type = target.registry_type

        if registry_type not in cls._backends:
            raise ValueError(f"Unsupported registry type: {registry_type.value}")

        if registry_type == RegistryType.MEMORY:
            return MemoryRegistry.shared(target.name)

        config = dict(target.options)
        config["name"] = target.name
        config["path"] = str(path_resolver.resolve(target.path)) if path_resolver else target.path

        return cls._backends[registry_type](config)

    @classmethod
    def register_backend(cls, registry_type: RegistryType, backend_class: Type[RegistryBackend]):
        """Register a new registry backend type

        Args:
            registry_type: Registry type enum
            backend_class: Backend class
        """
        cls._backends[registry_type] = backend_class

    @classmethod
    def get_supported_types(cls) -> list:
        """Get list of supported registry type names"""
        return [rt.value for rt in cls._backends.keys()]
