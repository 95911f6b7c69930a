"""Configuration data models"""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Any

from ..constants import (
    CONFIG_VERSION,
    DEFAULT_MAIN_FILE,
    DEFAULT_REGISTRY_NAME,
    DEFAULT_REGISTRY_PATH,
    ENV_REGISTRY_PATH,
    RegistryType,
)


@dataclass
class RegistryTarget:
    """Configuration for the package registry

    Workspaces publish to a filesystem registry under the state directory
    unless configured otherwise. Memory registries live only as long as the
    process.
    """

    type: str = RegistryType.FILESYSTEM.value
    name: str = DEFAULT_REGISTRY_NAME
    path: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate target configuration"""
        registry_type = RegistryType(self.type)

        if registry_type == RegistryType.FILESYSTEM and not self.path:
            self.path = DEFAULT_REGISTRY_PATH

    @property
    def registry_type(self) -> RegistryType:
        """Get RegistryType enum"""
        return RegistryType(self.type)

    def with_environment(self) -> 'RegistryTarget':
        """Target after applying the ``COMPONENT_RELEASE_REGISTRY`` override

        The override selects a filesystem registry at the given path. It is
        never written back to the configuration file.
        """
        path = os.environ.get(ENV_REGISTRY_PATH)
        if not path:
            return self
        return RegistryTarget(
            type=RegistryType.FILESYSTEM.value,
            name=self.name,
            path=path,
            options=dict(self.options)
        )

    def get_display_info(self) -> str:
        """Get display information for the target"""
        if self.registry_type == RegistryType.FILESYSTEM:
            return f"Filesystem: {self.path}"
        return f"{self.type}: {self.name}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {"type": self.type, "name": self.name}
        if self.path:
            data["path"] = self.path
        if self.options:
            data["options"] = self.options
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RegistryTarget':
        """Create from dictionary"""
        return cls(
            type=data.get("type") or RegistryType.FILESYSTEM.value,
            name=data.get("name", DEFAULT_REGISTRY_NAME),
            path=data.get("path"),
            options=data.get("options", {})
        )


@dataclass
class ComponentConfig:
    """A tracked component: source directory and main file"""

    path: str
    main: str = DEFAULT_MAIN_FILE
    package_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {"path": self.path, "main": self.main}
        if self.package_name:
            data["package_name"] = self.package_name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ComponentConfig':
        """Create from dictionary"""
        return cls(
            path=data["path"],
            main=data.get("main", DEFAULT_MAIN_FILE),
            package_name=data.get("package_name")
        )


@dataclass
class RemoteScopeConfig:
    """Location of the remote (authoritative) scope"""

    name: Optional[str] = None
    path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {"name": self.name, "path": self.path}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RemoteScopeConfig':
        """Create from dictionary"""
        return cls(name=data.get("name"), path=data.get("path"))


@dataclass
class Config:
    """Complete workspace configuration"""

    version: str = CONFIG_VERSION

    # Workspace settings
    default_scope: Optional[str] = None
    owner: Optional[str] = None
    package_name_template: Optional[str] = None

    # Tracked components keyed by component name
    components: Dict[str, ComponentConfig] = field(default_factory=dict)

    remote_scope: RemoteScopeConfig = field(default_factory=RemoteScopeConfig)
    registry: RegistryTarget = field(default_factory=RegistryTarget)

    # Publish settings
    auto_publish: bool = False

    # Logging
    logging: Dict[str, Any] = field(default_factory=dict)

    def add_component(self, name: str, component: ComponentConfig) -> None:
        """Add or update a tracked component"""
        self.components[name] = component

    def remove_component(self, name: str) -> bool:
        """Stop tracking a component"""
        if name in self.components:
            del self.components[name]
            return True
        return False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary"""
        data = data or {}
        config = cls(version=str(data.get("version", CONFIG_VERSION)))

        workspace = data.get("workspace") or {}
        config.default_scope = workspace.get("default_scope")
        config.owner = workspace.get("owner")
        config.package_name_template = workspace.get("package_name_template")

        for name, comp_data in (data.get("components") or {}).items():
            config.components[name] = ComponentConfig.from_dict(comp_data)

        config.remote_scope = RemoteScopeConfig.from_dict(data.get("remote_scope") or {})
        config.registry = RegistryTarget.from_dict(data.get("registry") or {})

        publish = data.get("publish") or {}
        config.auto_publish = bool(publish.get("auto_publish", False))

        config.logging = data.get("logging") or {}

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "version": self.version,
            "workspace": {
                "default_scope": self.default_scope,
                "owner": self.owner,
                "package_name_template": self.package_name_template,
            },
            "components": {
                name: comp.to_dict()
                for name, comp in self.components.items()
            },
            "remote_scope": self.remote_scope.to_dict(),
            "registry": self.registry.to_dict(),
            "publish": {"auto_publish": self.auto_publish},
            "logging": self.logging,
        }
