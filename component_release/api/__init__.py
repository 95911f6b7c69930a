# component_release/api/__init__.py
"""API layer for component-release: one function per command"""

from .exceptions import (
    ComponentReleaseError,
    ConfigError,
    WorkspaceNotFoundError,
    ComponentNotFoundError,
    NotExportedError,
    UnresolvedDependencyError,
    CyclicDependencyError,
    NamingError,
    VersionError,
    ImmutableVersionError,
    RegistryRejectionError,
    PackageNotFoundError,
    PartialFailure,
)
from .tagger import tag, tag_scope
from .exporter import export
from .publisher import Publisher, publish
from .query import show, status, dependencies
from .workspace import init, add_component, install

__all__ = [
    # Main classes
    "Publisher",

    # Command functions
    "init",
    "add_component",
    "tag",
    "tag_scope",
    "export",
    "publish",
    "show",
    "status",
    "dependencies",
    "install",

    # Exceptions
    "ComponentReleaseError",
    "ConfigError",
    "WorkspaceNotFoundError",
    "ComponentNotFoundError",
    "NotExportedError",
    "UnresolvedDependencyError",
    "CyclicDependencyError",
    "NamingError",
    "VersionError",
    "ImmutableVersionError",
    "RegistryRejectionError",
    "PackageNotFoundError",
    "PartialFailure",
]
