"""Workspace context passed to every operation"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from ..api.exceptions import ComponentNotFoundError, ConfigError, NamingError
from ..constants import COMPONENT_NAME_PATTERN, DEFAULT_EXCLUDE_PATTERNS, DEFAULT_MAIN_FILE, Stage
from ..models.component import Component, ComponentId
from ..models.config import ComponentConfig, Config
from ..plugins.base import PluginManager
from ..plugins.loader import PluginLoader
from ..registry.base import RegistryBackend
from ..registry.factory import RegistryFactory
from ..services.config_service import ConfigService
from ..utils.hash_utils import hash_bytes, snapshot_hash
from ..utils.file_utils import iter_files
from .builder import Builder, CopyBuilder
from .dependency_grapher import DependencyGrapher
from .identity_resolver import IdentityResolver
from .lifecycle import LifecycleStateMachine
from .path_resolver import PathResolver
from .scope_store import ScopeStore

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """Current sources of a component"""
    contents: Dict[str, bytes]
    hashes: Dict[str, str]
    digest: str


class Workspace:
    """A workspace: its configuration, scopes, registry and plugins

    Nothing is looked up globally; every operation receives the workspace it
    works on.
    """

    def __init__(self,
                 root: Union[str, Path],
                 config: Optional[Config] = None,
                 registry: Optional[RegistryBackend] = None,
                 builder: Optional[Builder] = None,
                 plugin_manager: Optional[PluginManager] = None):
        """
        Initialize workspace

        Args:
            root: Workspace root directory
            config: Workspace configuration (defaults to an empty one)
            registry: Package registry (defaults to the configured one)
            builder: Dist payload builder
            plugin_manager: Plugin manager receiving lifecycle hooks
        """
        self.paths = PathResolver(root)
        self.config = config or Config()
        self.builder = builder or CopyBuilder()
        self.plugin_manager = plugin_manager or PluginManager()
        self._registry = registry

        self.local_scope = ScopeStore(self.paths.get_state_dir(), name=self.config.default_scope)
        self.remote_scope = self._open_remote_scope()

        self.identity = IdentityResolver(self.config.owner, self.config.package_name_template)
        self.grapher = DependencyGrapher(self)
        self.lifecycle = LifecycleStateMachine(self)

        PluginLoader(self.plugin_manager).load_builtin_plugins(self)

    @classmethod
    def load(cls, root: Optional[Union[str, Path]] = None, **kwargs) -> 'Workspace':
        """
        Open the workspace containing ``root``

        Args:
            root: Any directory inside the workspace (defaults to the
                current directory)
            **kwargs: Passed to the constructor

        Raises:
            WorkspaceNotFoundError: If no workspace encloses ``root``
            ConfigError: If the configuration is invalid
        """
        workspace_root = PathResolver.find_workspace_root(Path(root) if root else None)
        config = ConfigService(workspace_root).load_config()
        return cls(workspace_root, config, **kwargs)

    def _open_remote_scope(self) -> Optional[ScopeStore]:
        remote = self.config.remote_scope
        if not remote.path:
            return None
        return ScopeStore(self.paths.resolve(remote.path), name=remote.name or self.config.default_scope)

    def require_remote_scope(self) -> ScopeStore:
        """Remote scope, which exporting needs"""
        if self.remote_scope is None:
            raise ConfigError("No remote scope configured (set remote_scope.path)")
        return self.remote_scope

    @property
    def registry(self) -> RegistryBackend:
        """Package registry (created from the configuration on first use)"""
        if self._registry is None:
            target = self.config.registry.with_environment()
            self._registry = RegistryFactory.create_from_config(target, self.paths)
        return self._registry

    # Components

    def component_ids(self) -> List[ComponentId]:
        """Ids of all tracked components, sorted"""
        ids = [ComponentId(name=name, scope=self.config.default_scope) for name in self.config.components]
        return sorted(ids, key=str)

    def has_component(self, component_id: ComponentId) -> bool:
        """Check if a component belongs to this workspace"""
        return component_id.scope == self.config.default_scope and component_id.name in self.config.components

    def get_id(self, value: str) -> ComponentId:
        """
        Resolve a user supplied id (``name`` or ``scope/name``)

        Raises:
            ComponentNotFoundError: If no tracked component matches
        """
        for component_id in self.component_ids():
            if component_id.matches(value):
                return component_id
        raise ComponentNotFoundError(value)

    def resolve_ids(self, values: Optional[Iterable[Union[str, ComponentId]]] = None) -> List[ComponentId]:
        """Resolve several ids; None means every component"""
        if values is None:
            return self.component_ids()

        resolved = []
        for value in values:
            component_id = value if isinstance(value, ComponentId) else self.get_id(value)
            if not self.has_component(component_id):
                raise ComponentNotFoundError(str(component_id))
            if component_id not in resolved:
                resolved.append(component_id)
        return resolved

    def component_config(self, component_id: ComponentId) -> ComponentConfig:
        """Tracked configuration of a component"""
        if not self.has_component(component_id):
            raise ComponentNotFoundError(str(component_id))
        return self.config.components[component_id.name]

    def component_dir(self, component_id: ComponentId) -> Path:
        """Source directory of a component"""
        return self.paths.resolve(self.component_config(component_id).path)

    def get_component(self, value: Union[str, ComponentId]) -> Component:
        """
        Full view of a component

        Untagged or modified components report the dependencies found in
        their current sources; otherwise those recorded by the latest tag.
        """
        component_id = value if isinstance(value, ComponentId) else self.get_id(value)
        comp_config = self.component_config(component_id)
        stage = self.lifecycle.stage_of(component_id)
        latest = self.local_scope.latest_tag(component_id)

        if latest is None or stage == Stage.MODIFIED:
            dependencies = self.grapher.compute_dependencies(component_id)
        else:
            dependencies = list(latest.dependencies)

        return Component(
            id=component_id,
            path=self.component_dir(component_id),
            main=comp_config.main,
            stage=stage,
            version=latest.version if latest else None,
            dependencies=dependencies,
            package_name_override=comp_config.package_name,
        )

    def package_name(self, component_id: ComponentId) -> str:
        """Package name of a workspace component: override, template, then default"""
        override = None
        if self.has_component(component_id):
            override = self.config.components[component_id.name].package_name
        return self.identity.resolve(component_id, override)

    def latest_version(self, component_id: ComponentId) -> Optional[str]:
        """Latest tagged version of a component"""
        latest = self.local_scope.latest_tag(component_id)
        return latest.version if latest else None

    # Sources

    def current_files(self, component_id: ComponentId) -> Dict[str, bytes]:
        """Current source files of a component, path -> content"""
        root = self.component_dir(component_id)
        return {path: (root / path).read_bytes() for path in iter_files(root, DEFAULT_EXCLUDE_PATTERNS)}

    def snapshot(self, component_id: ComponentId) -> Snapshot:
        """Current sources with their content hashes and snapshot hash"""
        contents = self.current_files(component_id)
        hashes = {path: hash_bytes(data) for path, data in contents.items()}
        main = self.component_config(component_id).main
        return Snapshot(contents=contents, hashes=hashes, digest=snapshot_hash(hashes, main))

    # Configuration

    def add_component(self, name: str, path: Optional[str] = None,
                      main: str = DEFAULT_MAIN_FILE,
                      package_name: Optional[str] = None) -> ComponentId:
        """
        Start tracking a component

        Args:
            name: Component name, ``/`` separated segments
            path: Source directory relative to the workspace (defaults to ``name``)
            main: Main file inside the source directory
            package_name: Explicit package name

        Returns:
            The new component id

        Raises:
            NamingError: If the name is malformed
            ConfigError: If the source directory does not exist
        """
        if not COMPONENT_NAME_PATTERN.match(name):
            raise NamingError(
                f"Invalid component name '{name}': use letters, digits, '-', '_' and '/' separators",
                name
            )

        path = path or name
        source_dir = self.paths.resolve(path)
        if not source_dir.is_dir():
            raise ConfigError(f"Component directory not found: {source_dir}")
        if not (source_dir / main).is_file():
            logger.warning(f"Main file {main} not found in {source_dir}")

        if package_name:
            self.identity.resolve(ComponentId(name=name, scope=self.config.default_scope), package_name)

        self.config.add_component(name, ComponentConfig(
            path=self.paths.relative(source_dir),
            main=main,
            package_name=package_name,
        ))
        self.save_config()

        component_id = ComponentId(name=name, scope=self.config.default_scope)
        logger.info(f"Tracking component {component_id}")
        return component_id

    def save_config(self) -> None:
        """Persist the configuration"""
        ConfigService(self.paths.workspace_root).save_config(self.config)

    def __repr__(self) -> str:
        return f"Workspace({self.paths.workspace_root})"
