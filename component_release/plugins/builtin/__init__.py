# component_release/plugins/builtin/__init__.py
"""Built-in plugins for component-release"""

from .auto_publish import AutoPublishPlugin

__all__ = [
    'AutoPublishPlugin',
]
