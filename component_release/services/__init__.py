# component_release/services/__init__.py
"""Business logic services for component-release"""

from .config_service import ConfigService
from .publish_service import PublishService
from .install_service import install_package

__all__ = [
    "ConfigService",
    "PublishService",
    "install_package",
]
