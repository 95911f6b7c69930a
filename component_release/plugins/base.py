# component_release/plugins/base.py
"""Plugin system base classes and manager"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Any, Optional


class PluginPriority(Enum):
    """Plugin execution priority"""
    HIGHEST = 0
    HIGH = 25
    NORMAL = 50
    LOW = 75
    LOWEST = 100


class HookPoint(Enum):
    """Available hook points in the component lifecycle

    Events are queued after the operation has persisted its result:

    - ``POST_TAG``: ``component_ids`` and ``versions`` of the new tags
    - ``POST_EXPORT``: ``component_ids`` and the exported ``versions``;
      handled by the built-in auto-publish plugin
    - ``POST_PUBLISH``: ``component_ids`` and ``packages`` pushed to the
      registry (dry runs emit nothing)
    """
    POST_TAG = "tag.post"
    POST_EXPORT = "export.post"
    POST_PUBLISH = "publish.post"


@dataclass
class PluginContext:
    """Context passed to plugin hooks"""
    hook_point: HookPoint
    operation: str
    data: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add error message"""
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        """Add warning message"""
        self.warnings.append(message)

    def has_errors(self) -> bool:
        """Check if context has errors"""
        return len(self.errors) > 0


@dataclass
class PluginInfo:
    """Plugin metadata"""
    name: str
    version: str
    description: str
    enabled: bool = True
    priority: PluginPriority = PluginPriority.NORMAL
    hook_points: List[HookPoint] = field(default_factory=list)
    config: Dict[str, Any] = field(default_factory=dict)


class Plugin(ABC):
    """Base class for all plugins"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize plugin

        Args:
            config: Plugin-specific configuration
        """
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def get_info(self) -> PluginInfo:
        """Get plugin information"""
        pass

    async def handle_hook(self, context: PluginContext) -> PluginContext:
        """
        Handle hook point

        Dispatches to ``on_<hook>`` (``export.post`` -> ``on_export_post``).

        Args:
            context: Plugin context

        Returns:
            Modified context
        """
        hook_point = context.hook_point
        handler_name = f"on_{hook_point.value.replace('.', '_')}"

        handler = getattr(self, handler_name, None)
        if handler and callable(handler):
            return await handler(context)

        return context


class PluginManager:
    """Plugin registry plus the queue of pending hook events

    Operations enqueue events; ``drain`` runs them in order until the queue
    is empty, including events enqueued by the plugins themselves.
    """

    def __init__(self):
        self._plugins: Dict[str, Plugin] = {}
        self._hooks: Dict[HookPoint, List[Plugin]] = {hp: [] for hp in HookPoint}
        self._queue: List[PluginContext] = []
        self._draining = False
        self.logger = logging.getLogger("PluginManager")

    def register(self, plugin: Plugin) -> None:
        """
        Register a plugin

        Args:
            plugin: Plugin instance
        """
        info = plugin.get_info()

        if info.name in self._plugins:
            self.logger.warning(f"Plugin {info.name} already registered, replacing")
            self.unregister(info.name)

        self._plugins[info.name] = plugin

        for hook_point in info.hook_points:
            self._hooks[hook_point].append(plugin)
            self._hooks[hook_point].sort(key=lambda p: p.get_info().priority.value)

        self.logger.debug(f"Registered plugin: {info.name} v{info.version}")

    def unregister(self, plugin_name: str) -> None:
        """
        Unregister a plugin

        Args:
            plugin_name: Plugin name
        """
        if plugin_name not in self._plugins:
            return

        plugin = self._plugins.pop(plugin_name)

        for hook_list in self._hooks.values():
            if plugin in hook_list:
                hook_list.remove(plugin)

        self.logger.debug(f"Unregistered plugin: {plugin_name}")

    async def execute_hook(self, context: PluginContext) -> PluginContext:
        """
        Execute plugins for the context's hook point

        A failing plugin adds an error to the context; later plugins still run.

        Args:
            context: Plugin context

        Returns:
            Modified context after all plugins
        """
        for plugin in list(self._hooks[context.hook_point]):
            info = plugin.get_info()

            if not info.enabled:
                continue

            try:
                self.logger.debug(f"Executing plugin {info.name} for {context.hook_point.value}")
                context = await plugin.handle_hook(context)
            except Exception as e:
                self.logger.error(f"Plugin {info.name} failed: {e}")
                context.add_error(f"Plugin {info.name} error: {str(e)}")

        return context

    def enqueue(self, context: PluginContext) -> None:
        """Queue a hook event"""
        self._queue.append(context)

    @property
    def pending(self) -> int:
        """Number of queued events"""
        return len(self._queue)

    async def drain(self) -> List[PluginContext]:
        """
        Run queued events until none is left

        A drain started while another one is running returns at once; the
        outer drain picks up the newly queued events.

        Returns:
            Processed contexts, in order
        """
        if self._draining:
            return []

        processed = []
        self._draining = True
        try:
            while self._queue:
                context = self._queue.pop(0)
                processed.append(await self.execute_hook(context))
        finally:
            self._draining = False

        return processed

    def get_plugin(self, name: str) -> Optional[Plugin]:
        """Get plugin by name"""
        return self._plugins.get(name)

    def list_plugins(self) -> List[PluginInfo]:
        """List all registered plugins"""
        return [p.get_info() for p in self._plugins.values()]
