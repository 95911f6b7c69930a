"""Export of staged tags to the remote scope"""

import logging
from typing import Iterable, List, Optional

from ..api.exceptions import ComponentReleaseError, ImmutableVersionError, VersionError
from ..models.component import ComponentId, Tag
from ..models.result import ExportResult
from ..plugins.base import HookPoint, PluginContext
from ..utils.async_utils import run_async
from ..utils.version_utils import is_greater

logger = logging.getLogger(__name__)


class Exporter:
    """Moves tags from the local scope to the remote scope"""

    def __init__(self, workspace):
        self.workspace = workspace

    def export(self, component_ids: Optional[Iterable[ComponentId]] = None) -> ExportResult:
        """
        Export staged components

        Every unexported tag of each staged component is copied, with its
        snapshot blobs, to the remote scope; the remote state is committed
        once. Post-export hooks then run for the exported components and
        anything they report becomes a warning of the export.

        Args:
            component_ids: Components to export (default: all)

        Returns:
            ExportResult: Exported versions, skipped components, failures,
                hook warnings and packages published by hooks

        Raises:
            ConfigError: If no remote scope is configured
            CyclicDependencyError: If the dependency graph has a cycle
        """
        remote = self.workspace.require_remote_scope()
        local = self.workspace.local_scope
        lifecycle = self.workspace.lifecycle

        ids = list(component_ids) if component_ids is not None else self.workspace.component_ids()
        order = self.workspace.grapher.topological_order(ids)

        result = ExportResult()
        pending: List[Tag] = []
        batch = set()

        for component_id in order:
            try:
                self._check_immutable(component_id)

                latest = local.latest_tag(component_id)
                dependencies = latest.dependencies if latest else []
                reason = lifecycle.check_export(component_id, dependencies, batch)
                if reason:
                    result.skipped[str(component_id)] = reason
                    continue

                tags = lifecycle.unexported_tags(component_id)
                remote_latest = remote.latest_tag(component_id)
                if remote_latest and not is_greater(tags[0].version, remote_latest.version):
                    raise VersionError(
                        f"{tags[0].key} is not greater than the exported version {remote_latest.version}"
                    )
            except ComponentReleaseError as e:
                logger.debug(f"Cannot export {component_id}: {e}")
                result.add_failure(str(component_id), str(e))
                continue

            for tag in tags:
                remote.copy_blobs(tag, local)
            pending.extend(tags)
            batch.add(component_id)
            result.exported[str(component_id)] = [tag.version for tag in tags]

        if pending:
            remote.commit(pending)
            logger.info(f"Exported {len(batch)} component(s) to scope {remote.name or remote.root}")
            self._dispatch(result, [cid for cid in order if cid in batch])

        result.complete()
        return result

    def _check_immutable(self, component_id: ComponentId) -> None:
        """Fail if a local tag reuses an exported version with other content"""
        remote = self.workspace.remote_scope
        for tag in self.workspace.local_scope.tags(component_id):
            exported = remote.get_tag(component_id, tag.version)
            if exported is not None and exported.snapshot_hash != tag.snapshot_hash:
                raise ImmutableVersionError(str(component_id), tag.version)

    def _dispatch(self, result: ExportResult, exported: List[ComponentId]) -> None:
        """Run post-export hooks and fold their outcome into the result"""
        manager = self.workspace.plugin_manager
        manager.enqueue(PluginContext(
            hook_point=HookPoint.POST_EXPORT,
            operation="export",
            data={
                "component_ids": [str(cid) for cid in exported],
                "versions": {str(cid): result.exported[str(cid)][-1] for cid in exported},
            },
        ))

        for context in run_async(manager.drain()):
            if context.hook_point != HookPoint.POST_EXPORT:
                continue
            for message in context.errors + context.warnings:
                result.add_warning(message)
            result.published.extend(context.data.get("published", []))
