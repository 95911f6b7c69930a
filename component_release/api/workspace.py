"""Workspace management API"""

from pathlib import Path
from typing import Optional, Union

from ..constants import DEFAULT_MAIN_FILE
from ..core.workspace import Workspace
from ..models import ComponentId
from ..services.config_service import ConfigService
from ..services.install_service import install_package
from ..utils.async_utils import run_async


def init(root: Union[str, Path],
         default_scope: Optional[str] = None,
         owner: Optional[str] = None,
         remote_scope_path: Optional[str] = None,
         registry_path: Optional[str] = None) -> Workspace:
    """
    Create a workspace configuration in ``root``

    Args:
        root: Workspace root directory
        default_scope: Scope of the workspace components
        owner: Package owner prefix, e.g. ``@ci``
        remote_scope_path: Remote scope directory
        registry_path: Filesystem registry directory (defaults to ``.component-release/registry``)

    Raises:
        ConfigError: If the directory already holds a workspace
    """
    root = Path(root)
    root.mkdir(parents=True, exist_ok=True)
    config = ConfigService(root).create_default(
        default_scope=default_scope,
        owner=owner,
        remote_scope_path=remote_scope_path,
        registry_path=registry_path,
    )
    return Workspace(root, config)


def add_component(workspace: Workspace,
                  name: str,
                  path: Optional[str] = None,
                  main: str = DEFAULT_MAIN_FILE,
                  package_name: Optional[str] = None) -> ComponentId:
    """
    Track a component

    Raises:
        NamingError: If the name is malformed
        ConfigError: If the directory does not exist
    """
    return workspace.add_component(name, path=path, main=main, package_name=package_name)


def install(workspace: Workspace, package_name: str, version: str,
            dest: Optional[Union[str, Path]] = None) -> Path:
    """
    Install a published package into ``node_modules``

    Args:
        workspace: Workspace whose registry is used
        package_name: Package name
        version: Package version
        dest: Directory receiving ``node_modules`` (defaults to the workspace root)

    Returns:
        Installed package directory

    Raises:
        PackageNotFoundError: If the version is not published
    """
    dest = Path(dest) if dest else workspace.paths.workspace_root
    return run_async(install_package(workspace.registry, package_name, version, dest))
