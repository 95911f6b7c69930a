# component_release/plugins/__init__.py
"""Plugin system for component-release"""

from .base import (
    Plugin,
    PluginInfo,
    PluginContext,
    PluginManager,
    PluginPriority,
    HookPoint,
)
from .loader import PluginLoader

__all__ = [
    # Base classes
    'Plugin',
    'PluginInfo',
    'PluginContext',
    'PluginManager',
    'PluginPriority',
    'HookPoint',

    # Loader
    'PluginLoader',
]
