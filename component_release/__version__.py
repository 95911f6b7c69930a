"""Version information for component-release package"""

__version__ = "0.1.0"
__version_info__ = (0, 1, 0)
__license__ = "MIT"


def get_version():
    """Get the version string"""
    return __version__
