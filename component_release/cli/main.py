# component_release/cli/main.py
"""Main CLI entry point for component-release"""

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from ..constants import APP_NAME, ENV_LOG_LEVEL, ENV_WORKSPACE_ROOT, LOG_FORMAT
from ..core import Workspace
from .utils.output import console

# Import all commands
from .commands import (
    init,
    add,
    tag,
    export,
    publish,
    show,
    install,
)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = os.environ.get(ENV_LOG_LEVEL, "WARNING").upper()

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True,
    )

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiofiles").setLevel(logging.WARNING)


class Context:
    """CLI context object with lazy workspace loading

    The workspace is only looked up when a command that needs it asks
    for it, so ``init`` works outside of any workspace.
    """

    def __init__(self, workspace_root: Optional[Path] = None):
        """Initialize CLI context

        Args:
            workspace_root: Directory to look for the workspace from
        """
        self.workspace_root = workspace_root
        self.verbose: bool = False
        self.debug: bool = False
        self._workspace: Optional[Workspace] = None

    @property
    def workspace(self) -> Workspace:
        """Get the workspace (loaded on first access)

        Raises:
            WorkspaceNotFoundError: If no workspace encloses the directory
            ConfigError: If the workspace configuration is invalid
        """
        if self._workspace is None:
            self._workspace = Workspace.load(self.workspace_root)
            if self.debug:
                console.print(f"[dim]Workspace root: {self._workspace.paths.workspace_root}[/dim]")
        return self._workspace


@click.group(name=APP_NAME)
@click.option('-w', '--workspace', 'workspace_root', envvar=ENV_WORKSPACE_ROOT,
              type=click.Path(file_okay=False, path_type=Path),
              help='Workspace directory (defaults to the current directory)')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.pass_context
def cli(ctx, workspace_root, verbose, debug, quiet):
    """Component Release - Version, export and publish workspace components

    Components are tagged with semantic versions, exported to a remote
    scope and published as npm-style packages to a registry.
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    # Create context with lazy initialization
    ctx.obj = Context(workspace_root)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(init.init)
cli.add_command(add.add)
cli.add_command(tag.tag)
cli.add_command(tag.tag_scope)
cli.add_command(export.export)
cli.add_command(publish.publish)
cli.add_command(show.show)
cli.add_command(show.status)
cli.add_command(install.install)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
