"""Publisher API for publishing operations"""

import logging
from typing import Iterable, List, Optional, Union

from ..core.workspace import Workspace
from ..models import ComponentId, ComponentPublishResult, PublishRequest, PublishResult
from ..registry.base import RegistryBackend
from ..services.publish_service import PublishService
from ..utils.async_utils import run_async
from .exceptions import PartialFailure

logger = logging.getLogger(__name__)


class Publisher:
    """Publisher class for publishing operations"""

    def __init__(self, workspace: Workspace, registry: Optional[RegistryBackend] = None):
        """
        Initialize publisher

        Args:
            workspace: Workspace to publish from
            registry: Registry override (defaults to the configured one)
        """
        self.workspace = workspace
        self.service = PublishService(workspace, registry)

    def publish(self,
                components: Optional[Iterable[Union[str, ComponentId]]] = None,
                dry_run: bool = False,
                allow_staged: bool = False) -> PublishResult:
        """
        Publish components

        Args:
            components: Component ids (default: every tagged component)
            dry_run: Render ``+ name@version`` without pushing
            allow_staged: Publish staged components that are not exported

        Returns:
            PublishResult: Publishing result

        Raises:
            NotExportedError: If any component is not eligible
        """
        component_ids = self._resolve(components)
        if not component_ids:
            logger.warning("Nothing to publish")
            return PublishResult(dry_run=dry_run)

        return run_async(self.service.publish_components(
            component_ids,
            dry_run=dry_run,
            allow_staged=allow_staged,
        ))

    def publish_request(self, request: PublishRequest) -> ComponentPublishResult:
        """
        Run a single publish request

        Raises:
            NotExportedError: If the component is not eligible
        """
        eligible = self.service.check_eligibility(
            [request.component_id], allow_staged=request.allow_staged, dry_run=request.dry_run
        )
        tag = eligible[request.component_id]
        if request.version and request.version != tag.version:
            tag = self.workspace.local_scope.get_tag(request.component_id, request.version)
        return run_async(self.service.publish(request, tag))

    def _resolve(self, components) -> List[ComponentId]:
        if components is not None:
            return self.workspace.resolve_ids(components)
        return [
            cid for cid in self.workspace.component_ids()
            if self.workspace.latest_version(cid) is not None
        ]


# Convenience function
def publish(workspace: Workspace,
            components: Optional[Iterable[Union[str, ComponentId]]] = None,
            dry_run: bool = False,
            allow_staged: bool = False) -> PublishResult:
    """
    Publish components (convenience function)

    Args:
        workspace: Workspace to publish from
        components: Component ids (default: every tagged component)
        dry_run: Render ``+ name@version`` without pushing
        allow_staged: Publish staged components that are not exported

    Returns:
        PublishResult: Publishing result, all components succeeded

    Raises:
        NotExportedError: If any component is not eligible
        PartialFailure: If some components failed; ``result`` holds the outcome
    """
    result = Publisher(workspace).publish(components, dry_run=dry_run, allow_staged=allow_staged)
    if result.failures:
        raise PartialFailure("publish", result.failures, len(result.components), result)
    return result

