"""Initialize command for creating new workspaces"""

from pathlib import Path

import click

from ..decorators import handle_errors
from ..utils.output import console
from ...api import workspace as workspace_api
from ...constants import EMOJI_SUCCESS, WORKSPACE_CONFIG_FILE


@click.command()
@click.argument('path', required=False, default='.')
@click.option('--scope', '-s', 'default_scope', help='Scope of the workspace components')
@click.option('--owner', '-o', help='Package owner prefix, e.g. @ci')
@click.option('--remote-scope', 'remote_scope_path',
              help='Directory of the remote scope components are exported to')
@click.option('--registry', 'registry_path',
              help='Filesystem registry directory (default: .component-release/registry)')
@click.pass_context
@handle_errors("Init failed")
def init(ctx, path, default_scope, owner, remote_scope_path, registry_path):
    """Initialize a new workspace

    Examples:
        component-release init
        component-release init ./ui --scope acme.ui --owner @ci --remote-scope ../remote
    """
    root = Path(path).resolve()

    workspace_api.init(
        root,
        default_scope=default_scope,
        owner=owner,
        remote_scope_path=remote_scope_path,
        registry_path=registry_path,
    )

    console.print(f"[green]{EMOJI_SUCCESS}[/green] Created {root / WORKSPACE_CONFIG_FILE}")
