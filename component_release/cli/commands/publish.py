"""Publish command"""

import click

from ..decorators import handle_errors, require_workspace
from ..utils.output import format_publish_result
from ...api import publisher


@click.command()
@click.argument('components', nargs=-1)
@click.option('--dry-run', is_flag=True,
              help='Print what would be published without pushing')
@click.option('--allow-staged', is_flag=True,
              help='Publish staged components that were not exported')
@click.pass_context
@handle_errors("Publish failed")
@require_workspace
def publish(ctx, workspace, components, dry_run, allow_staged):
    """Publish exported components to the package registry

    Each published package is printed as "+ name@version".

    Examples:
        # Publish every tagged component
        component-release publish

        # Preview the package names
        component-release publish comp1 --dry-run
    """
    result = publisher.publish(
        workspace,
        components=components or None,
        dry_run=dry_run,
        allow_staged=allow_staged,
    )
    format_publish_result(result)
