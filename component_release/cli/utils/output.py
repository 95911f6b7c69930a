# component_release/cli/utils/output.py
"""Output formatting utilities"""

import json
from typing import Any, Dict, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

from ...api.exceptions import ComponentReleaseError, PartialFailure
from ...constants import EMOJI_ERROR, EMOJI_PACKAGE, EMOJI_SUCCESS, EMOJI_WARNING
from ...models import ExportResult, PublishResult, TagResult

console = Console()


def format_tag_result(result: TagResult) -> None:
    """Format and display tag operation result"""
    if result.tagged:
        lines = [f"[green]{EMOJI_SUCCESS}[/green] {len(result.tagged)} component(s) tagged", ""]
        for component_id, version in result.tagged.items():
            lines.append(f"  • {escape(component_id)}@{version}")
        console.print(Panel("\n".join(lines), title="Tag Result", border_style="green"))
    elif not result.failures:
        console.print(f"[yellow]{EMOJI_WARNING} Nothing to tag[/yellow]")

    for component_id, reason in result.skipped.items():
        console.print(f"[dim]skipped {escape(component_id)}: {escape(reason)}[/dim]")


def format_export_result(result: ExportResult) -> None:
    """Format and display export operation result"""
    if result.exported:
        lines = [f"[green]{EMOJI_SUCCESS}[/green] {len(result.exported)} component(s) exported", ""]
        for component_id, versions in result.exported.items():
            lines.append(f"  • {escape(component_id)}: {', '.join(versions)}")
        console.print(Panel("\n".join(lines), title="Export Result", border_style="green"))
    elif not result.failures:
        console.print(f"[yellow]{EMOJI_WARNING} Nothing to export[/yellow]")

    for spec in result.published:
        console.print(f"{EMOJI_PACKAGE} published {escape(spec)}")

    for warning in result.warnings:
        console.print(f"[yellow]{EMOJI_WARNING} {escape(warning)}[/yellow]")

    for component_id, reason in result.skipped.items():
        console.print(f"[dim]skipped {escape(component_id)}: {escape(reason)}[/dim]")


def format_publish_result(result: PublishResult) -> None:
    """Format and display publish operation result

    Successful packages are listed as plain ``+ name@version`` lines.
    """
    for line in result.output.splitlines():
        console.print(line, markup=False, highlight=False, soft_wrap=True)

    if result.dry_run and result.succeeded:
        console.print("[dim]dry run, nothing was pushed[/dim]")


def format_error(error: ComponentReleaseError, title: str = "Error") -> None:
    """Display an error panel

    Partial failures also show what did succeed.
    """
    if isinstance(error, PartialFailure) and error.result is not None:
        partial = error.result
        if isinstance(partial, TagResult):
            format_tag_result(partial)
        elif isinstance(partial, ExportResult):
            format_export_result(partial)
        elif isinstance(partial, PublishResult):
            format_publish_result(partial)

    message = f"[red]{EMOJI_ERROR}[/red] {escape(str(error))}"
    if error.error_code:
        message += f"\n\n[dim]code: {error.error_code}[/dim]"

    console.print(Panel(message, title=title, border_style="red"))


def format_component(data: Dict[str, Any]) -> None:
    """Format and display a component description"""
    table = Table(show_header=False, box=box.ROUNDED, title=escape(data["id"]))
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("stage", data["stage"])
    table.add_row("version", data["version"] or "-")
    table.add_row("package", escape(data["package_name"]))
    table.add_row("path", escape(data["path"]))
    table.add_row("main", escape(data["main"]))
    table.add_row("dependencies", escape("\n".join(data["dependencies"])) or "-")
    table.add_row("versions", ", ".join(data["versions"]) or "-")
    table.add_row("exported", ", ".join(data["exported_versions"]) or "-")

    published = [
        f"{version}: {', '.join(records.values())}"
        for version, records in data["published"].items()
    ]
    table.add_row("published", escape("\n".join(published)) or "-")

    console.print(table)


def format_table(data: List[Dict[str, Any]],
                 columns: List[Tuple[str, str]],
                 title: Optional[str] = None) -> Table:
    """Create a formatted table

    Args:
        data: List of dictionaries with data
        columns: List of (key, header) tuples
        title: Optional table title

    Returns:
        Rich Table object
    """
    table = Table(title=title, box=box.ROUNDED)

    for key, header in columns:
        table.add_column(header, style="cyan" if key == "id" else None)

    for item in data:
        row = []
        for key, _ in columns:
            value = item.get(key)
            row.append(escape(str(value)) if value is not None else "-")
        table.add_row(*row)

    return table


def format_json(data: Any) -> None:
    """Print data as JSON"""
    console.print_json(json.dumps(data, default=str))
