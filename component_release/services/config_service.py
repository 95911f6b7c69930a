"""Configuration management service"""

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

import yaml

from ..api.exceptions import ConfigError
from ..constants import SCOPE_NAME_PATTERN, WORKSPACE_CONFIG_FILE
from ..models.config import Config

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for reading and writing the workspace configuration"""

    def __init__(self, workspace_root: Path):
        """Initialize config service

        Args:
            workspace_root: Workspace root directory
        """
        self.workspace_root = Path(workspace_root)
        self.config_path = self.workspace_root / WORKSPACE_CONFIG_FILE
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get current configuration (lazy load)"""
        if self._config is None:
            self.load_config()
        return self._config

    def exists(self) -> bool:
        """Check if the configuration file exists"""
        return self.config_path.exists()

    def load_config(self) -> Config:
        """Load configuration from file

        Returns:
            Loaded configuration

        Raises:
            ConfigError: If the file is missing or malformed
        """
        if not self.config_path.exists():
            raise ConfigError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            content = f.read()

        # Expand environment variables in the file
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid configuration in {self.config_path}: expected a mapping")

        try:
            self._config = Config.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration in {self.config_path}: {e}")

        self._check_scope(self._config.default_scope)

        logger.debug(f"Loaded configuration from {self.config_path}")
        return self._config

    def save_config(self, config: Optional[Config] = None, backup: bool = True) -> None:
        """Save configuration to file

        Args:
            config: Configuration to save (uses current if not provided)
            backup: Keep the previous file as ``.yaml.bak``
        """
        if config:
            self._config = config

        if not self._config:
            raise ConfigError("No configuration to save")

        if backup and self.config_path.exists():
            backup_path = self.config_path.with_suffix('.yaml.bak')
            shutil.copy2(self.config_path, backup_path)

        data = self._config.to_dict()

        with open(self.config_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to {self.config_path}")

    def create_default(self,
                       default_scope: Optional[str] = None,
                       owner: Optional[str] = None,
                       remote_scope_path: Optional[str] = None,
                       registry_path: Optional[str] = None) -> Config:
        """Write a fresh configuration file

        Args:
            default_scope: Scope of the workspace components
            owner: Package owner prefix
            remote_scope_path: Remote scope directory
            registry_path: Filesystem registry directory (defaults to the state directory)

        Raises:
            ConfigError: If a configuration already exists or the scope is malformed
        """
        if self.exists():
            raise ConfigError(f"Configuration already exists: {self.config_path}")

        self._check_scope(default_scope)

        data = {
            "workspace": {"default_scope": default_scope, "owner": owner},
            "remote_scope": {"name": default_scope, "path": remote_scope_path},
            "registry": {"path": registry_path} if registry_path else {},
        }
        config = Config.from_dict(data)
        self.save_config(config, backup=False)
        return config

    @staticmethod
    def _check_scope(scope: Optional[str]) -> None:
        if scope is not None and not SCOPE_NAME_PATTERN.match(scope):
            raise ConfigError(f"Invalid scope name: {scope!r}")
