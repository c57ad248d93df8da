"""
File write pipelines: content resolution, single-file writes and
multi-file pushes.
"""

from githost_tools.services.github.files.content_resolver import (
    ContentResolver,
    decode_html_entities,
    extract_code_block,
)
from githost_tools.services.github.files.push_orchestrator import (
    MultiFilePushOrchestrator,
    PushState,
)
from githost_tools.services.github.files.single_file_writer import SingleFileWriter

__all__ = [
    "ContentResolver",
    "MultiFilePushOrchestrator",
    "PushState",
    "SingleFileWriter",
    "decode_html_entities",
    "extract_code_block",
]
