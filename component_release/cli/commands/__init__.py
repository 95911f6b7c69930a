# component_release/cli/commands/__init__.py
"""CLI commands"""

from . import init
from . import add
from . import tag
from . import export
from . import publish
from . import show
from . import install

__all__ = [
    "init",
    "add",
    "tag",
    "export",
    "publish",
    "show",
    "install",
]
