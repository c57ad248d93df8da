"""
Shared types and models for GitHub file operations.

Remote payloads are pydantic models so malformed responses fail loudly;
internal outcomes are plain enums and dataclasses.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from githost_tools.services.github.errors import ResponseValidationError

FILE_MODE_REGULAR = "100644"
TREE_ENTRY_BLOB = "blob"


class GitHubModel(BaseModel):
    """Base for GitHub payloads; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")


class FileEdit(GitHubModel):
    """A single file to write as part of a multi-file push."""

    path: str = Field(..., min_length=1, description="Repository-relative file path")
    content: str = Field(..., description="UTF-8 file content")


class GitHubAuthor(GitHubModel):
    name: str
    email: str
    date: Optional[str] = None


class GitHubFileContent(GitHubModel):
    """A single file returned by the contents API."""

    type: str
    name: str
    path: str
    sha: str
    size: int = 0
    encoding: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None
    git_url: Optional[str] = None
    html_url: Optional[str] = None
    download_url: Optional[str] = None


class GitHubDirectoryEntry(GitHubModel):
    """One item of a directory listing returned by the contents API."""

    type: str
    name: str
    path: str
    sha: str
    size: int = 0
    url: Optional[str] = None
    git_url: Optional[str] = None
    html_url: Optional[str] = None
    download_url: Optional[str] = None


class GitHubTreeEntry(GitHubModel):
    path: str
    mode: str
    type: str
    sha: Optional[str] = None
    size: Optional[int] = None
    url: Optional[str] = None


class GitHubTree(GitHubModel):
    sha: str
    url: str
    tree: List[GitHubTreeEntry] = Field(default_factory=list)
    truncated: bool = False


class GitHubObjectRef(GitHubModel):
    sha: str
    url: Optional[str] = None
    html_url: Optional[str] = None


class GitHubCommit(GitHubModel):
    sha: str
    message: str
    tree: GitHubObjectRef
    parents: List[GitHubObjectRef]
    node_id: Optional[str] = None
    url: Optional[str] = None
    html_url: Optional[str] = None
    author: Optional[GitHubAuthor] = None
    committer: Optional[GitHubAuthor] = None


class GitHubReferenceObject(GitHubModel):
    sha: str
    type: str = "commit"
    url: Optional[str] = None


class GitHubReference(GitHubModel):
    ref: str
    object: GitHubReferenceObject
    node_id: Optional[str] = None
    url: Optional[str] = None


class CreateOrUpdateFileResponse(GitHubModel):
    """Result of a contents API PUT: the written file plus the new commit."""

    content: Optional[GitHubFileContent]
    commit: GitHubCommit
    created: bool = Field(default=False, description="Set locally: no prior blob sha was sent")


class ShaLookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR_IGNORED = "error_ignored"


@dataclass
class ShaLookup:
    status: ShaLookupStatus
    sha: Optional[str] = None
    error: Optional[str] = None


class PushStage(str, Enum):
    READ_HEAD = "read_head"
    BUILD_TREE = "build_tree"
    BUILD_COMMIT = "build_commit"
    UPDATE_REF = "update_ref"
    DONE = "done"


FileContentsResult = Union[GitHubFileContent, List[GitHubDirectoryEntry]]

_file_contents_adapter = TypeAdapter(Union[List[GitHubDirectoryEntry], GitHubFileContent])

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_response(model: Type[ModelT], data: Any) -> ModelT:
    """Validate a GitHub response against a model.

    Raises:
        ResponseValidationError: If the payload does not match the model
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ResponseValidationError(model.__name__, str(e)) from e


def parse_file_contents(data: Any) -> FileContentsResult:
    """Validate a contents API response, which is either a file or a listing."""
    try:
        return _file_contents_adapter.validate_python(data)
    except ValidationError as e:
        raise ResponseValidationError("GitHubContent", str(e)) from e
