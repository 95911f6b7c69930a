"""Component lifecycle state machine

Stages move ``NEW -> STAGED`` (tag), ``STAGED -> EXPORTED`` (export) and
``EXPORTED -> MODIFIED`` (source change), then ``MODIFIED -> STAGED`` again.
The stage is derived from the local scope, the remote scope and the current
sources, so there is no stored state that can drift.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Set, Tuple

from ..api.exceptions import NotExportedError, UnresolvedDependencyError
from ..constants import Stage
from ..models.component import ComponentId, ComponentRef, Tag

if TYPE_CHECKING:
    from .workspace import Workspace

logger = logging.getLogger(__name__)


class Transition(Enum):
    """Lifecycle transitions"""
    TAG = "tag"
    EXPORT = "export"
    PUBLISH = "publish"


# Stages each transition starts from, without overrides
ALLOWED_SOURCES: Dict[Transition, Set[Stage]] = {
    Transition.TAG: {Stage.NEW, Stage.MODIFIED},
    Transition.EXPORT: {Stage.STAGED},
    Transition.PUBLISH: {Stage.EXPORTED},
}

TARGET_STAGE: Dict[Transition, Optional[Stage]] = {
    Transition.TAG: Stage.STAGED,
    Transition.EXPORT: Stage.EXPORTED,
    Transition.PUBLISH: None,  # publishing does not move the stage
}


def can_transition(stage: Stage, transition: Transition,
                   force: bool = False, allow_staged: bool = False) -> bool:
    """
    Check whether ``transition`` may start from ``stage``

    Args:
        stage: Current stage
        transition: Requested transition
        force: Tag components that are already staged or exported
        allow_staged: Publish components that are staged but not exported
    """
    if stage in ALLOWED_SOURCES[transition]:
        return True
    if transition == Transition.TAG and force:
        return True
    if transition == Transition.PUBLISH and allow_staged and stage == Stage.STAGED:
        return True
    return False


def compute_stage(latest: Optional[Tag], current_hash: str, exported: bool) -> Stage:
    """
    Derive a stage

    Args:
        latest: Latest local tag
        current_hash: Snapshot hash of the current sources
        exported: Whether the latest tag exists in the remote scope
    """
    if latest is None:
        return Stage.NEW
    if latest.snapshot_hash != current_hash:
        return Stage.MODIFIED
    if not exported:
        return Stage.STAGED
    return Stage.EXPORTED


class LifecycleStateMachine:
    """Stage tracking and transition guards for a workspace"""

    def __init__(self, workspace: 'Workspace'):
        self.workspace = workspace

    def stage_of(self, component_id: ComponentId) -> Stage:
        """Current stage of a component"""
        latest = self.workspace.local_scope.latest_tag(component_id)
        if latest is None:
            return Stage.NEW

        current_hash = self.workspace.snapshot(component_id).digest
        return compute_stage(latest, current_hash, self.is_exported(component_id, latest.version))

    def stages(self, component_ids: Optional[Iterable[ComponentId]] = None) -> Dict[ComponentId, Stage]:
        """Stages of several components"""
        ids = component_ids if component_ids is not None else self.workspace.component_ids()
        return {component_id: self.stage_of(component_id) for component_id in ids}

    def is_exported(self, component_id: ComponentId, version: str) -> bool:
        """Check if a version exists in the remote scope"""
        remote = self.workspace.remote_scope
        return remote is not None and remote.has_version(component_id, version)

    def unexported_tags(self, component_id: ComponentId) -> List[Tag]:
        """Local tags missing from the remote scope, oldest first"""
        return [
            tag for tag in self.workspace.local_scope.tags(component_id)
            if not self.is_exported(component_id, tag.version)
        ]

    # Guards

    def check_tag(self,
                  component_id: ComponentId,
                  dependencies: Iterable[ComponentRef],
                  batch: Iterable[ComponentId] = ()) -> None:
        """
        Dependency guard of the tag transition

        Every workspace dependency must be at least staged, or be tagged in
        the same batch. Dependencies that come from installed packages are
        already published and always qualify.

        Raises:
            UnresolvedDependencyError: Listing the unready dependencies
        """
        batch = set(batch)
        unready = []
        for ref in dependencies:
            if not self.workspace.has_component(ref.id) or ref.id in batch:
                continue
            stage = self.stage_of(ref.id)
            if stage.rank < Stage.STAGED.rank:
                unready.append(str(ref.id))

        if unready:
            raise UnresolvedDependencyError(str(component_id), unready)

    def check_export(self,
                     component_id: ComponentId,
                     dependencies: Iterable[ComponentRef],
                     batch: Iterable[ComponentId] = ()) -> Optional[str]:
        """
        Guard of the export transition

        Returns:
            None when the component may be exported, else why it is skipped

        Raises:
            UnresolvedDependencyError: If a dependency version is neither
                exported nor part of the same export
        """
        stage = self.stage_of(component_id)
        if not can_transition(stage, Transition.EXPORT):
            return f"component is {stage.value}, only staged components can be exported"

        if not self.unexported_tags(component_id):
            return "nothing to export"

        batch = set(batch)
        unready = []
        for ref in dependencies:
            if not self.workspace.has_component(ref.id) or ref.id in batch:
                continue
            if ref.version and not self.is_exported(ref.id, ref.version):
                unready.append(ref.id.with_version(ref.version))
        if unready:
            raise UnresolvedDependencyError(str(component_id), unready,
                                            operation="export", state="exported")

        return None

    def check_publish(self,
                      component_ids: Iterable[ComponentId],
                      allow_staged: bool = False,
                      dry_run: bool = False) -> Dict[ComponentId, Tag]:
        """
        Guard of the publish transition for a batch

        Dry runs skip the export requirement but still need a tag.

        Returns:
            Tag to publish for each component

        Raises:
            NotExportedError: Naming every offending component
        """
        eligible: Dict[ComponentId, Tag] = {}
        offenders: List[str] = []

        for component_id in component_ids:
            latest = self.workspace.local_scope.latest_tag(component_id)
            stage = self.stage_of(component_id)

            if latest is not None and (dry_run or can_transition(stage, Transition.PUBLISH,
                                                                 allow_staged=allow_staged)):
                eligible[component_id] = latest
            else:
                logger.debug(f"{component_id} is {stage.value}, cannot publish")
                offenders.append(component_id.name)

        if offenders:
            raise NotExportedError(offenders)

        return eligible

    def summary(self) -> List[Tuple[str, str, Optional[str]]]:
        """``(id, stage, latest version)`` for every workspace component"""
        rows = []
        for component_id in self.workspace.component_ids():
            rows.append((
                str(component_id),
                self.stage_of(component_id).value,
                self.workspace.latest_version(component_id),
            ))
        return rows
