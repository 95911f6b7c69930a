# component_release/cli/decorators/__init__.py
"""CLI decorators"""

from .workspace import require_workspace, handle_errors

__all__ = [
    'require_workspace',
    'handle_errors',
]
