"""Tagging API"""

from typing import Iterable, Optional, Union

from ..constants import DEFAULT_BUMP
from ..core.version_tagger import VersionTagger
from ..core.workspace import Workspace
from ..models import ComponentId, TagResult
from .exceptions import PartialFailure


def tag(workspace: Workspace,
        components: Optional[Iterable[Union[str, ComponentId]]] = None,
        version: Optional[str] = None,
        bump: str = DEFAULT_BUMP,
        force: bool = False) -> TagResult:
    """
    Tag components

    Successful tags are persisted even when other components fail.

    Args:
        workspace: Workspace to tag in
        components: Component ids (default: every new or modified component)
        version: Explicit version
        bump: ``patch``, ``minor`` or ``major``
        force: Re-tag staged or exported components

    Returns:
        TagResult: Assigned versions

    Raises:
        PartialFailure: If any component failed; ``result`` holds the outcome
    """
    component_ids = workspace.resolve_ids(components) if components is not None else None
    result = VersionTagger(workspace).tag(component_ids, version=version, bump=bump, force=force)
    if result.failures:
        total = len(result.tagged) + len(result.failures)
        raise PartialFailure("tag", result.failures, total, result)
    return result


def tag_scope(workspace: Workspace, version: str) -> TagResult:
    """
    Tag every component of the workspace with ``version`` atomically

    Args:
        workspace: Workspace to tag in
        version: Version for every component

    Returns:
        TagResult: Assigned versions

    Raises:
        PartialFailure: If any component failed; nothing was tagged
    """
    result = VersionTagger(workspace).tag_scope(version)
    if result.failures:
        total = len(workspace.component_ids())
        raise PartialFailure("tag", result.failures, total, result)
    return result
