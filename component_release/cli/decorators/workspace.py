# component_release/cli/decorators/workspace.py
"""Workspace context decorators for CLI commands"""

from functools import wraps
from typing import Callable

import click

from ..utils.output import console, format_error
from ...api.exceptions import ComponentReleaseError, WorkspaceNotFoundError
from ...constants import APP_NAME, EMOJI_ERROR


def require_workspace(func: Callable) -> Callable:
    """Decorator that loads the workspace before the command runs

    The loaded workspace is passed to the command as its first argument
    after the click context.

    Args:
        func: Command function to decorate

    Returns:
        Decorated function
    """
    @wraps(func)
    def wrapper(ctx: click.Context, *args, **kwargs):
        try:
            workspace = ctx.obj.workspace
        except WorkspaceNotFoundError as e:
            console.print(
                f"{EMOJI_ERROR} {e}\n"
                f"Run '{APP_NAME} init' to create a workspace."
            )
            ctx.exit(1)
        except ComponentReleaseError as e:
            format_error(e, title="Failed to load workspace")
            ctx.exit(1)

        return func(ctx, workspace, *args, **kwargs)

    return wrapper


def handle_errors(title: str = "Error"):
    """Decorator that turns library errors into an error panel and exit code 1

    Args:
        title: Panel title

    Returns:
        Decorator function
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(ctx: click.Context, *args, **kwargs):
            try:
                return func(ctx, *args, **kwargs)
            except ComponentReleaseError as e:
                format_error(e, title=title)
                if ctx.obj is not None and ctx.obj.debug:
                    console.print_exception()
                ctx.exit(1)

        return wrapper

    return decorator
