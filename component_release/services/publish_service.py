# component_release/services/publish_service.py
"""Publish service implementation"""

import logging
from typing import Dict, Iterable, List, Optional

from ..api.exceptions import ComponentReleaseError
from ..constants import DIST_DIR
from ..core.builder import pack_tarball
from ..models import (
    ComponentId,
    ComponentPublishResult,
    PackageArtifact,
    PackageManifest,
    PublishRequest,
    PublishResult,
    Tag,
)
from ..plugins.base import HookPoint, PluginContext
from ..registry.base import RegistryBackend
from ..utils.hash_utils import hash_bytes

logger = logging.getLogger(__name__)


class PublishService:
    """Turns tagged components into registry packages"""

    def __init__(self, workspace, registry: Optional[RegistryBackend] = None):
        """
        Initialize publish service

        Args:
            workspace: Workspace the components belong to
            registry: Target registry (defaults to the workspace registry)
        """
        self.workspace = workspace
        self.registry = registry or workspace.registry

    def check_eligibility(self,
                          component_ids: Iterable[ComponentId],
                          allow_staged: bool = False,
                          dry_run: bool = False) -> Dict[ComponentId, Tag]:
        """
        Resolve the tag to publish for each component

        Raises:
            NotExportedError: Naming every component that may not be published
        """
        return self.workspace.lifecycle.check_publish(
            component_ids, allow_staged=allow_staged, dry_run=dry_run
        )

    def build_manifest(self, tag: Tag) -> PackageManifest:
        """
        Package manifest of a tag

        Dependencies are rendered with their own package names at the
        versions recorded by the tag. A version that was never exported
        belongs to no remote scope, so its ``componentId`` carries no scope.

        Raises:
            NamingError: If a package name cannot be resolved
        """
        dependencies = {}
        for ref in tag.dependencies:
            if not ref.version:
                continue
            if self.workspace.has_component(ref.id) or not ref.package_name:
                name = self.workspace.package_name(ref.id)
            else:
                name = ref.package_name
            dependencies[name] = ref.version

        exported = self.workspace.lifecycle.is_exported(tag.component_id, tag.version)
        main = self.workspace.builder.main_entry(tag)
        return PackageManifest(
            name=self.workspace.package_name(tag.component_id),
            version=tag.version,
            main=f"{DIST_DIR}/{main}",
            dependencies=dependencies,
            component_id={
                "scope": tag.component_id.scope if exported else None,
                "name": tag.component_id.name,
                "version": tag.version,
            },
            files=[f"{DIST_DIR}/{path}" for path in sorted(tag.files)],
        )

    def build_artifact(self, tag: Tag, manifest: PackageManifest) -> PackageArtifact:
        """Build the dist payload of a tag and pack it"""
        files = self.workspace.local_scope.read_files(tag)
        dist_files = self.workspace.builder.build(tag, files)
        manifest.files = [f"{DIST_DIR}/{path}" for path in sorted(dist_files)]

        payload = pack_tarball(manifest, dist_files)
        return PackageArtifact(
            package_name=manifest.name,
            version=manifest.version,
            manifest=manifest,
            payload=payload,
            checksum=hash_bytes(payload),
        )

    async def publish(self, request: PublishRequest, tag: Optional[Tag] = None) -> ComponentPublishResult:
        """
        Publish one component version

        Dry runs stop after rendering the manifest and never contact the
        registry. Failures are returned in the result, not raised.

        Args:
            request: Publish request
            tag: Tag to publish (looked up from the request when omitted)

        Returns:
            ComponentPublishResult: Outcome for the component
        """
        component_id = request.component_id
        tag = tag or self.workspace.local_scope.get_tag(component_id, request.version)
        if tag is None:
            return self._failure(request, None, f"{component_id.with_version(request.version)} is not tagged")

        try:
            manifest = self.build_manifest(tag)
        except ComponentReleaseError as e:
            return self._failure(request, None, str(e))

        if request.dry_run:
            logger.debug(f"Dry run: {manifest.spec}")
            return ComponentPublishResult(
                component_id=component_id,
                version=tag.version,
                package_name=manifest.name,
                success=True,
                dry_run=True,
                manifest=manifest,
                registry=request.registry_target,
            )

        try:
            artifact = self.build_artifact(tag, manifest)
            spec = await self.registry.push(artifact)
        except ComponentReleaseError as e:
            logger.debug(f"Publishing {manifest.spec} failed: {e}")
            return self._failure(request, manifest, str(e))

        self.workspace.local_scope.record_published(tag.key, self.registry.name, spec)
        logger.info(f"Published {spec} to {self.registry.get_display_info()}")

        return ComponentPublishResult(
            component_id=component_id,
            version=tag.version,
            package_name=manifest.name,
            success=True,
            manifest=manifest,
            registry=self.registry.name,
            checksum=artifact.checksum,
        )

    def _failure(self, request: PublishRequest, manifest: Optional[PackageManifest],
                 error: str) -> ComponentPublishResult:
        return ComponentPublishResult(
            component_id=request.component_id,
            version=request.version,
            package_name=manifest.name if manifest else "",
            success=False,
            dry_run=request.dry_run,
            manifest=manifest,
            registry=request.registry_target,
            error=error,
        )

    async def publish_components(self,
                                 component_ids: Iterable[ComponentId],
                                 dry_run: bool = False,
                                 allow_staged: bool = False) -> PublishResult:
        """
        Publish several components

        Eligibility of the whole batch is checked before any registry call.
        A failing component does not stop the others.

        Args:
            component_ids: Components to publish
            dry_run: Render packages without pushing them
            allow_staged: Also publish components that are staged but not exported

        Returns:
            PublishResult: Per-component outcomes

        Raises:
            NotExportedError: If any component is not eligible
        """
        component_ids = list(component_ids)
        eligible = self.check_eligibility(component_ids, allow_staged=allow_staged, dry_run=dry_run)

        requests = [
            PublishRequest(
                component_id=component_id,
                version=eligible[component_id].version,
                registry_target=self.registry.name,
                dry_run=dry_run,
                allow_staged=allow_staged,
            )
            for component_id in component_ids
        ]
        return await self.publish_requests(requests, dry_run=dry_run)

    async def publish_requests(self,
                               requests: Iterable[PublishRequest],
                               dry_run: bool = False) -> PublishResult:
        """
        Run publish requests whose versions are already resolved

        No eligibility check is made here. A failing request does not stop
        the others; pushed packages are announced on ``POST_PUBLISH``.
        """
        result = PublishResult(dry_run=dry_run)
        for request in requests:
            result.add_component(await self.publish(request))

        result.complete()

        published = [c for c in result.succeeded if not c.dry_run]
        if published:
            await self._dispatch(published)

        return result

    async def _dispatch(self, published: List[ComponentPublishResult]) -> None:
        manager = self.workspace.plugin_manager
        manager.enqueue(PluginContext(
            hook_point=HookPoint.POST_PUBLISH,
            operation="publish",
            data={
                "component_ids": [str(c.component_id) for c in published],
                "packages": [c.spec for c in published],
            },
        ))
        await manager.drain()
