# component_release/registry/__init__.py
"""Package registries for component-release"""

from .base import RegistryBackend, is_valid_registry_name
from .filesystem import FilesystemRegistry
from .memory import MemoryRegistry
from .factory import RegistryFactory

__all__ = [
    'RegistryBackend',
    'is_valid_registry_name',
    'FilesystemRegistry',
    'MemoryRegistry',
    'RegistryFactory',
]
