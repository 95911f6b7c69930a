"""Export API"""

from typing import Iterable, Optional, Union

from ..core.exporter import Exporter
from ..core.workspace import Workspace
from ..models import ComponentId, ExportResult
from .exceptions import PartialFailure


def export(workspace: Workspace,
           components: Optional[Iterable[Union[str, ComponentId]]] = None) -> ExportResult:
    """
    Export staged components to the remote scope

    Post-export hooks (automatic publish) run afterwards; their problems are
    reported as ``warnings`` of the result.

    Args:
        workspace: Workspace to export from
        components: Component ids (default: every staged component)

    Returns:
        ExportResult: Exported versions and hook outcome

    Raises:
        ConfigError: If no remote scope is configured
        PartialFailure: If any component failed; ``result`` holds the outcome
    """
    component_ids = workspace.resolve_ids(components) if components is not None else None
    result = Exporter(workspace).export(component_ids)
    if result.failures:
        total = len(result.exported) + len(result.failures)
        raise PartialFailure("export", result.failures, total, result)
    return result
