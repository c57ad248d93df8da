"""
GitHub Models Module

Pydantic payload models and internal result types.
"""

from githost_tools.services.github.models.types import (
    CreateOrUpdateFileResponse,
    FileContentsResult,
    FileEdit,
    GitHubCommit,
    GitHubDirectoryEntry,
    GitHubFileContent,
    GitHubReference,
    GitHubTree,
    PushStage,
    ShaLookup,
    ShaLookupStatus,
)

__all__ = [
    "CreateOrUpdateFileResponse",
    "FileContentsResult",
    "FileEdit",
    "GitHubCommit",
    "GitHubDirectoryEntry",
    "GitHubFileContent",
    "GitHubReference",
    "GitHubTree",
    "PushStage",
    "ShaLookup",
    "ShaLookupStatus",
]
