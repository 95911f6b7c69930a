"""Plugin loader"""

import logging

from .base import PluginManager
from .builtin.auto_publish import AutoPublishPlugin


class PluginLoader:
    """Register the plugins a workspace configuration asks for"""

    def __init__(self, plugin_manager: PluginManager):
        """
        Initialize plugin loader

        Args:
            plugin_manager: Plugin manager instance
        """
        self.plugin_manager = plugin_manager
        self.logger = logging.getLogger("PluginLoader")

    def load_builtin_plugins(self, workspace) -> int:
        """
        Load the enabled built-in plugins

        Args:
            workspace: Workspace the plugins act on

        Returns:
            Number of plugins loaded
        """
        count = 0

        if workspace.config.auto_publish:
            self.plugin_manager.register(AutoPublishPlugin(workspace))
            count += 1

        if count:
            self.logger.debug(f"Loaded {count} built-in plugin(s)")
        return count
