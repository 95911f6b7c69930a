"""Core functionality for component-release"""

from .path_resolver import PathResolver
from .scope_store import ScopeStore
from .identity_resolver import IdentityResolver, PackageIndex, resolve_package_name
from .dependency_grapher import DependencyGrapher
from .lifecycle import LifecycleStateMachine, Transition
from .builder import Builder, CopyBuilder
from .version_tagger import VersionTagger
from .exporter import Exporter
from .workspace import Workspace

__all__ = [
    "PathResolver",
    "ScopeStore",
    "IdentityResolver",
    "PackageIndex",
    "resolve_package_name",
    "DependencyGrapher",
    "LifecycleStateMachine",
    "Transition",
    "Builder",
    "CopyBuilder",
    "VersionTagger",
    "Exporter",
    "Workspace",
]
