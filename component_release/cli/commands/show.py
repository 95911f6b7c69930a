"""Query commands"""

import click

from ..decorators import handle_errors, require_workspace
from ..utils.output import console, format_component, format_json, format_table
from ...api import query


@click.command()
@click.argument('component')
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@click.option('--transitive', is_flag=True, help='List transitive dependencies')
@click.pass_context
@handle_errors("Show failed")
@require_workspace
def show(ctx, workspace, component, as_json, transitive):
    """Show a component

    Dependencies are listed as "id@version".

    Examples:
        component-release show ui/button
        component-release show app --transitive --json
    """
    data = query.show(workspace, component)
    if transitive:
        data["dependencies"] = query.dependencies(workspace, component, transitive=True)

    if as_json:
        format_json(data)
    else:
        format_component(data)


@click.command()
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@click.pass_context
@handle_errors("Status failed")
@require_workspace
def status(ctx, workspace, as_json):
    """Show the stage of every component

    Examples:
        component-release status
    """
    rows = query.status(workspace)

    if as_json:
        format_json(rows)
        return

    if not rows:
        console.print("[yellow]No components tracked[/yellow]")
        return

    console.print(format_table(
        rows,
        [("id", "Component"), ("stage", "Stage"), ("version", "Version")],
        title="Components",
    ))
