"""CLI utility functions"""

from .output import (
    console,
    format_tag_result,
    format_export_result,
    format_publish_result,
    format_error,
    format_component,
    format_table,
    format_json,
)

__all__ = [
    'console',
    'format_tag_result',
    'format_export_result',
    'format_publish_result',
    'format_error',
    'format_component',
    'format_table',
    'format_json',
]
