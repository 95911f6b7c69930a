"""component-release - versioning and publishing of workspace components.

Components are tagged with immutable semantic versions, exported to a remote
scope and published as packages to a registry.
"""

from .__version__ import __version__, __version_info__, __license__

# Exceptions
from .api.exceptions import (
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

# Core API
from .api import (
    Publisher,
    init,
    add_component,
    tag,
    tag_scope,
    export,
    publish,
    show,
    status,
    install,
)
from .core.workspace import Workspace
from .core.identity_resolver import resolve_package_name

# Data models
from .models import (
    Component,
    ComponentId,
    ComponentRef,
    Tag,
    PublishRequest,
    PackageManifest,
    PackageArtifact,
    TagResult,
    ExportResult,
    PublishResult,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__license__",

    # Workspace and commands
    "Workspace",
    "Publisher",
    "init",
    "add_component",
    "tag",
    "tag_scope",
    "export",
    "publish",
    "show",
    "status",
    "install",
    "resolve_package_name",

    # Data models
    "Component",
    "ComponentId",
    "ComponentRef",
    "Tag",
    "PublishRequest",
    "PackageManifest",
    "PackageArtifact",
    "TagResult",
    "ExportResult",
    "PublishResult",

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
