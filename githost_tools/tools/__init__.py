"""Tool-facing entry points."""

from githost_tools.tools.file_tools import (
    TOOL_DEFINITIONS,
    call_tool,
    create_or_update_file,
    get_file_contents,
    push_files,
)

__all__ = [
    "TOOL_DEFINITIONS",
    "call_tool",
    "create_or_update_file",
    "get_file_contents",
    "push_files",
]
