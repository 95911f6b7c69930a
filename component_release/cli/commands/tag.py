"""Tag commands"""

import click

from ..decorators import handle_errors, require_workspace
from ..utils.output import format_tag_result
from ...api import tagger
from ...constants import DEFAULT_BUMP
from ...utils.version_utils import BUMP_TYPES


@click.command()
@click.argument('components', nargs=-1)
@click.option('--version', '-V', 'version', help='Explicit version for the tagged components')
@click.option('--bump', '-b', type=click.Choice(BUMP_TYPES), default=DEFAULT_BUMP,
              show_default=True, help='Version increment')
@click.option('--force', '-f', is_flag=True,
              help='Re-tag components that are already staged or exported')
@click.pass_context
@handle_errors("Tag failed")
@require_workspace
def tag(ctx, workspace, components, version, bump, force):
    """Tag components with a new version

    Without COMPONENTS every new or modified component is tagged.

    Examples:
        component-release tag
        component-release tag ui/button --bump minor
        component-release tag comp1 --version 1.0.0
    """
    result = tagger.tag(
        workspace,
        components=components or None,
        version=version,
        bump=bump,
        force=force,
    )
    format_tag_result(result)


@click.command(name='tag-scope')
@click.argument('version')
@click.pass_context
@handle_errors("Tag failed")
@require_workspace
def tag_scope(ctx, workspace, version):
    """Tag every component with VERSION

    Nothing is tagged unless every component can be.

    Examples:
        component-release tag-scope 1.0.0
    """
    result = tagger.tag_scope(workspace, version)
    format_tag_result(result)
