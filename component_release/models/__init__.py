# component_release/models/__init__.py
"""Data models for component-release"""

from .component import Component, ComponentId, ComponentRef, Tag, PublishRequest
from .manifest import PackageManifest, PackageArtifact
from .result import (
    OperationStatus,
    Result,
    TagResult,
    ExportResult,
    PublishResult,
    ComponentPublishResult,
)
from .config import Config, ComponentConfig, RegistryTarget, RemoteScopeConfig

__all__ = [
    # Component models
    "Component",
    "ComponentId",
    "ComponentRef",
    "Tag",
    "PublishRequest",

    # Manifest models
    "PackageManifest",
    "PackageArtifact",

    # Result models
    "OperationStatus",
    "Result",
    "TagResult",
    "ExportResult",
    "PublishResult",
    "ComponentPublishResult",

    # Config models
    "Config",
    "ComponentConfig",
    "RegistryTarget",
    "RemoteScopeConfig",
]
