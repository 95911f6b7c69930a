"""Version tagging of components and whole scopes"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..api.exceptions import ComponentReleaseError, ConfigError, VersionError
from ..constants import DEFAULT_BUMP
from ..models.component import ComponentId, Tag
from ..models.result import TagResult
from ..plugins.base import HookPoint, PluginContext
from ..utils.async_utils import run_async
from ..utils.version_utils import BUMP_TYPES, is_greater, is_valid_version, suggest_version
from .identity_resolver import PackageIndex
from .lifecycle import Transition, can_transition

logger = logging.getLogger(__name__)


@dataclass
class _PreparedTag:
    tag: Tag
    contents: Dict[str, bytes]


class SkipTag(Exception):
    """Raised internally when a component has nothing to tag"""


class VersionTagger:
    """Assigns immutable versions to workspace components"""

    def __init__(self, workspace):
        """
        Initialize version tagger

        Args:
            workspace: Workspace to tag in
        """
        self.workspace = workspace

    def tag(self,
            component_ids: Optional[Iterable[ComponentId]] = None,
            version: Optional[str] = None,
            bump: str = DEFAULT_BUMP,
            force: bool = False) -> TagResult:
        """
        Tag components

        Components are visited dependencies first. A component that fails
        its guard is reported in the result and does not stop its siblings;
        the successful tags are committed together at the end.

        Args:
            component_ids: Components to tag (default: every new or
                modified component)
            version: Explicit version for every tagged component
            bump: ``patch``, ``minor`` or ``major`` when no version is pinned
            force: Re-tag staged or exported components

        Returns:
            TagResult: Versions assigned and per-component failures

        Raises:
            VersionError: If ``version`` or ``bump`` is invalid
            CyclicDependencyError: If the dependency graph has a cycle
        """
        self._validate_options(version, bump)
        result = TagResult()

        if component_ids is None:
            component_ids = [
                cid for cid, stage in self.workspace.lifecycle.stages().items()
                if can_transition(stage, Transition.TAG)
            ]
        component_ids = list(component_ids)

        prepared = self._prepare_batch(component_ids, version, bump, force, result)

        if prepared:
            self._persist(prepared)
            for item in prepared:
                result.tagged[str(item.tag.component_id)] = item.tag.version
            self._dispatch(prepared)

        result.complete()
        logger.info(f"Tagged {len(result.tagged)} component(s), {len(result.failures)} failed")
        return result

    def tag_scope(self, version: str) -> TagResult:
        """
        Tag every workspace component with the same version, atomically

        All tags are computed and validated before anything is written; if
        any component fails, none is tagged.

        Args:
            version: Version for every component

        Returns:
            TagResult: Either every component tagged, or failures and no tags

        Raises:
            VersionError: If ``version`` is not a valid semantic version
            CyclicDependencyError: If the dependency graph has a cycle
        """
        if not version:
            raise VersionError("tag-scope requires an explicit version")
        self._validate_options(version, DEFAULT_BUMP)

        result = TagResult(atomic=True)
        component_ids = self.workspace.component_ids()

        prepared = self._prepare_batch(component_ids, version, DEFAULT_BUMP, True, result)

        if result.failures:
            logger.warning(f"Scope tag {version} aborted, {len(result.failures)} component(s) failed")
            result.complete(0)
            return result

        if prepared:
            self._persist(prepared)
            for item in prepared:
                result.tagged[str(item.tag.component_id)] = item.tag.version
            self._dispatch(prepared)

        result.complete()
        return result

    def _validate_options(self, version: Optional[str], bump: str) -> None:
        if version is not None and not is_valid_version(version):
            raise VersionError(f"Invalid version format: {version}")
        if bump not in BUMP_TYPES:
            raise VersionError(f"Invalid bump type: {bump} (expected one of {', '.join(BUMP_TYPES)})")

    def _prepare_batch(self,
                       component_ids: List[ComponentId],
                       version: Optional[str],
                       bump: str,
                       force: bool,
                       result: TagResult) -> List[_PreparedTag]:
        """Compute the tags of a batch in dependency order"""
        grapher = self.workspace.grapher
        order = grapher.topological_order(component_ids)
        index = grapher.build_index()

        prepared: List[_PreparedTag] = []
        batch_versions: Dict[ComponentId, str] = {}

        for component_id in order:
            try:
                item = self._prepare(component_id, version, bump, force, batch_versions, index)
            except SkipTag as e:
                result.skipped[str(component_id)] = str(e)
                continue
            except ComponentReleaseError as e:
                logger.debug(f"Cannot tag {component_id}: {e}")
                result.add_failure(str(component_id), str(e))
                continue

            prepared.append(item)
            batch_versions[component_id] = item.tag.version

        return prepared

    def _prepare(self,
                 component_id: ComponentId,
                 version: Optional[str],
                 bump: str,
                 force: bool,
                 batch_versions: Dict[ComponentId, str],
                 index: PackageIndex) -> _PreparedTag:
        """Build the next tag of one component without persisting it"""
        lifecycle = self.workspace.lifecycle
        stage = lifecycle.stage_of(component_id)
        if not can_transition(stage, Transition.TAG, force=force):
            raise SkipTag(f"component is {stage.value}, use force to tag it again")

        main = self.workspace.component_config(component_id).main
        snapshot = self.workspace.snapshot(component_id)
        if main not in snapshot.contents:
            raise ConfigError(f"main file {main} of {component_id} does not exist")

        dependencies = self.workspace.grapher.compute_dependencies(
            component_id,
            files=snapshot.contents,
            versions=batch_versions,
            index=index,
        )
        lifecycle.check_tag(component_id, dependencies, batch=batch_versions)

        latest = self.workspace.latest_version(component_id)
        new_version = version or suggest_version(latest, bump)
        if not is_greater(new_version, latest):
            raise VersionError(
                f"version {new_version} of {component_id} must be greater than the latest version {latest}"
            )

        tag = Tag.create(
            component_id=component_id,
            version=new_version,
            snapshot_hash=snapshot.digest,
            main=main,
            files=snapshot.hashes,
            dependencies=dependencies,
        )
        return _PreparedTag(tag=tag, contents=snapshot.contents)

    def _persist(self, prepared: List[_PreparedTag]) -> None:
        """Store the snapshot blobs, then commit every tag in one write"""
        scope = self.workspace.local_scope
        for item in prepared:
            for data in item.contents.values():
                scope.write_blob(data)
        scope.commit([item.tag for item in prepared])

    def _dispatch(self, prepared: List[_PreparedTag]) -> None:
        manager = self.workspace.plugin_manager
        manager.enqueue(PluginContext(
            hook_point=HookPoint.POST_TAG,
            operation="tag",
            data={
                "component_ids": [str(item.tag.component_id) for item in prepared],
                "versions": {str(item.tag.component_id): item.tag.version for item in prepared},
            },
        ))
        run_async(manager.drain())
