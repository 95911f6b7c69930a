"""Automatic publish after export"""

from ..base import Plugin, PluginInfo, PluginContext, PluginPriority, HookPoint
from ...api.exceptions import ComponentReleaseError
from ...models import PublishRequest
from ...services.publish_service import PublishService


class AutoPublishPlugin(Plugin):
    """Publish every exported component at its exported version

    Enabled by ``publish.auto_publish: true``. Publish failures are reported
    as warnings; they never fail the export itself.
    """

    def __init__(self, workspace, config=None):
        super().__init__(config)
        self.workspace = workspace

    def get_info(self) -> PluginInfo:
        return PluginInfo(
            name="auto-publish",
            version="1.0.0",
            description="Publish components to the registry after export",
            priority=PluginPriority.NORMAL,
            hook_points=[HookPoint.POST_EXPORT],
            config=self.config
        )

    async def on_export_post(self, context: PluginContext) -> PluginContext:
        """Publish the versions listed in the export event"""
        versions = context.data.get("versions") or {}
        if not versions:
            return context

        service = PublishService(self.workspace)
        try:
            requests = [
                PublishRequest(
                    component_id=self.workspace.get_id(component_id),
                    version=version,
                    registry_target=service.registry.name,
                )
                for component_id, version in versions.items()
            ]
            result = await service.publish_requests(requests)
        except ComponentReleaseError as e:
            context.add_warning(f"auto-publish failed: {e}")
            return context

        published = context.data.setdefault("published", [])
        for component in result.components:
            if component.success:
                published.append(component.spec)
            else:
                context.add_warning(f"auto-publish of {component.component_id} failed: {component.error}")

        self.logger.info(f"Auto-published {len(result.succeeded)} of {len(result.components)} component(s)")
        return context
