"""Global constants for component-release"""

from enum import Enum
import re

APP_NAME = "component-release"
LOG_FORMAT = "%(message)s"

# Version related
CONFIG_VERSION = "1.0"
STATE_VERSION = "1.0"

# Workspace identification
WORKSPACE_CONFIG_FILE = ".component-release.yaml"
WORKSPACE_MARKERS = [
    WORKSPACE_CONFIG_FILE,
]

# Directory structure
STATE_DIR = ".component-release"
STATE_FILE = "scope.json"
OBJECTS_DIR = "objects"
REGISTRY_DIR = "registry"
DIST_DIR = "dist"
NODE_MODULES_DIR = "node_modules"
PACKAGE_ROOT_DIR = "package"
PACKAGE_MANIFEST_FILE = "package.json"

# Registry layout
REGISTRY_MANIFEST_FILE = "manifest.json"
REGISTRY_PAYLOAD_FILE = "package.tgz"

# Default configuration values
DEFAULT_FIRST_VERSION = "0.0.1"
DEFAULT_BUMP = "patch"
DEFAULT_MAIN_FILE = "index.js"
DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1MB
DEFAULT_REGISTRY_NAME = "default"
DEFAULT_REGISTRY_PATH = f"{STATE_DIR}/{REGISTRY_DIR}"

# Files never captured in a component snapshot
DEFAULT_EXCLUDE_PATTERNS = [
    "node_modules/",
    ".component-release/",
    "dist/",
    ".git/",
    "__pycache__/",
    ".DS_Store",
    "*.log",
    "*.tmp",
]

# Source extensions scanned for requires/imports
SCANNED_EXTENSIONS = {".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx"}

# Package name limits (registry rules)
MAX_PACKAGE_NAME_LENGTH = 214


class RegistryType(Enum):
    FILESYSTEM = "filesystem"
    MEMORY = "memory"


# Component lifecycle stage, ordered from least to most settled
class Stage(Enum):
    NEW = "new"
    MODIFIED = "modified"
    STAGED = "staged"
    EXPORTED = "exported"

    @property
    def rank(self) -> int:
        return _STAGE_RANK[self]


_STAGE_RANK = {
    Stage.NEW: 0,
    Stage.MODIFIED: 1,
    Stage.STAGED: 2,
    Stage.EXPORTED: 3,
}


# Error codes
class ErrorCode:
    CONFIG_FORMAT_ERROR = "CR001"
    WORKSPACE_NOT_FOUND = "CR002"
    COMPONENT_NOT_FOUND = "CR003"
    NOT_EXPORTED = "CR010"
    UNRESOLVED_DEPENDENCY = "CR011"
    CYCLIC_DEPENDENCY = "CR012"
    NAMING_ERROR = "CR013"
    VERSION_ERROR = "CR014"
    IMMUTABLE_VERSION = "CR015"
    REGISTRY_REJECTION = "CR020"
    PACKAGE_NOT_FOUND = "CR021"
    PARTIAL_FAILURE = "CR030"


# Environment variables
ENV_LOG_LEVEL = "COMPONENT_RELEASE_LOG_LEVEL"
ENV_REGISTRY_PATH = "COMPONENT_RELEASE_REGISTRY"
ENV_WORKSPACE_ROOT = "COMPONENT_RELEASE_WORKSPACE"

# Validation patterns
VERSION_PATTERN = re.compile(
    r"^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"$"
)
COMPONENT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+(?:/[A-Za-z0-9_-]+)*$")
SCOPE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+(?:\.[A-Za-z0-9_-]+)*$")
TEMPLATE_TOKEN_PATTERN = re.compile(r"\{([^{}]*)\}")
LOCAL_PACKAGE_NAME_PATTERN = re.compile(r"^[a-z0-9@/._~-]+$")
REGISTRY_SCOPED_NAME_PATTERN = re.compile(r"^@([^/]+)/([^/]+)$")
URL_SAFE_SEGMENT_PATTERN = re.compile(r"^[a-z0-9._-]+$")

# Messages templates
MSG_NOT_EXPORTED = (
    "unable to publish the following component(s), "
    "please make sure they are exported: {ids}"
)
MSG_INVALID_NAME = 'Invalid name: "{name}"'
MSG_DUPLICATE_VERSION = "You cannot publish over the previously published versions: {version}."

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_PACKAGE = "📦"
