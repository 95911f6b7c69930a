"""Path resolution module for component-release"""

import os
from pathlib import Path
from typing import Optional, Union

from ..api.exceptions import WorkspaceNotFoundError
from ..constants import (
    ENV_WORKSPACE_ROOT,
    NODE_MODULES_DIR,
    OBJECTS_DIR,
    STATE_DIR,
    STATE_FILE,
    WORKSPACE_CONFIG_FILE,
    WORKSPACE_MARKERS,
)


class PathResolver:
    """Resolves paths within a workspace"""

    def __init__(self, workspace_root: Union[str, Path]):
        """Initialize path resolver

        Args:
            workspace_root: Root directory of the workspace
        """
        self.workspace_root = Path(workspace_root).resolve()

    def resolve(self, path: Union[str, Path]) -> Path:
        """Resolve a path relative to workspace root

        Args:
            path: Path to resolve (can be relative or absolute)

        Returns:
            Resolved absolute path
        """
        path = Path(path)

        if path.is_absolute():
            return path

        return (self.workspace_root / path).resolve()

    def relative(self, path: Union[str, Path]) -> str:
        """Express a path relative to the workspace root (POSIX separators)"""
        path = self.resolve(path)
        try:
            return path.relative_to(self.workspace_root).as_posix()
        except ValueError:
            return path.as_posix()

    def get_config_path(self) -> Path:
        """Get workspace config file path"""
        return self.workspace_root / WORKSPACE_CONFIG_FILE

    def get_state_dir(self) -> Path:
        """Get local scope directory"""
        return self.workspace_root / STATE_DIR

    def get_state_file(self) -> Path:
        """Get local scope state file"""
        return self.get_state_dir() / STATE_FILE

    def get_objects_dir(self) -> Path:
        """Get local object store directory"""
        return self.get_state_dir() / OBJECTS_DIR

    def get_node_modules_dir(self) -> Path:
        """Get installed packages directory"""
        return self.workspace_root / NODE_MODULES_DIR

    @staticmethod
    def find_workspace_root(start_path: Optional[Path] = None) -> Path:
        """Find the workspace root by walking up from ``start_path``

        Args:
            start_path: Starting directory (defaults to the environment
                override, then the current directory)

        Returns:
            Workspace root path

        Raises:
            WorkspaceNotFoundError: If no marker is found
        """
        if start_path is None:
            env_root = os.environ.get(ENV_WORKSPACE_ROOT)
            start_path = Path(env_root) if env_root else Path.cwd()

        current = Path(start_path).resolve()
        for candidate in [current, *current.parents]:
            if any((candidate / marker).exists() for marker in WORKSPACE_MARKERS):
                return candidate

        raise WorkspaceNotFoundError()
