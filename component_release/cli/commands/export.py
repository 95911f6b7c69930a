"""Export command"""

import click

from ..decorators import handle_errors, require_workspace
from ..utils.output import format_export_result
from ...api import exporter


@click.command()
@click.argument('components', nargs=-1)
@click.pass_context
@handle_errors("Export failed")
@require_workspace
def export(ctx, workspace, components):
    """Export staged components to the remote scope

    With auto_publish enabled in the workspace configuration, exported
    components are published right after.

    Examples:
        component-release export
        component-release export ui/button
    """
    result = exporter.export(workspace, components=components or None)
    format_export_result(result)
