"""Install command"""

from pathlib import Path

import click

from ..decorators import handle_errors, require_workspace
from ..utils.output import console
from ...api import workspace as workspace_api
from ...constants import EMOJI_SUCCESS


def parse_package_spec(spec: str):
    """Split ``name@version`` (the name may itself start with ``@``)"""
    name, sep, version = spec.rpartition('@')
    if not sep or not name or not version:
        raise click.BadParameter(f"Invalid package spec: {spec}. Use 'name@version'")
    return name, version


@click.command()
@click.argument('package')
@click.option('--dest', '-d', type=click.Path(file_okay=False),
              help='Directory receiving node_modules (defaults to the workspace root)')
@click.pass_context
@handle_errors("Install failed")
@require_workspace
def install(ctx, workspace, package, dest):
    """Install a published package into node_modules

    Examples:
        component-release install @ci/acme.ui.button@0.0.1
        component-release install utils@1.2.0 --dest ../consumer
    """
    name, version = parse_package_spec(package)
    target = workspace_api.install(workspace, name, version, Path(dest) if dest else None)
    console.print(f"[green]{EMOJI_SUCCESS}[/green] Installed {name}@{version} into {target}")
