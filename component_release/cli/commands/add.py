"""Add command for tracking components"""

import click

from ..decorators import handle_errors, require_workspace
from ..utils.output import console
from ...api import workspace as workspace_api
from ...constants import DEFAULT_MAIN_FILE, EMOJI_SUCCESS


@click.command()
@click.argument('name')
@click.option('--path', '-p', help='Component directory (defaults to NAME)')
@click.option('--main', '-m', default=DEFAULT_MAIN_FILE, show_default=True,
              help='Main entry file of the component')
@click.option('--package-name', help='Explicit package name')
@click.pass_context
@handle_errors("Add failed")
@require_workspace
def add(ctx, workspace, name, path, main, package_name):
    """Track a component directory

    Examples:
        component-release add ui/button
        component-release add utils --path src/utils --main main.js
    """
    component_id = workspace_api.add_component(
        workspace, name, path=path, main=main, package_name=package_name
    )
    console.print(
        f"[green]{EMOJI_SUCCESS}[/green] Tracking {component_id} "
        f"as {workspace.package_name(component_id)}"
    )
