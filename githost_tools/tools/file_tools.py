"""Tool entry points for repository file operations.

Each tool takes the raw argument mapping sent by a caller, validates it
against a request model and returns a JSON-serializable result. Errors are
raised as ``GitHubToolError`` subclasses for the calling layer to report.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from githost_tools.services.github.errors import InvalidArgumentError
from githost_tools.services.github.github_service import GitHubFilesService
from githost_tools.services.github.models.types import FileEdit

logger = logging.getLogger(__name__)

OWNER_DESCRIPTION = "Repository owner (username or organization)"
REPO_DESCRIPTION = "Repository name"


class GetFileContentsRequest(BaseModel):
    owner: str = Field(..., description=OWNER_DESCRIPTION)
    repo: str = Field(..., description=REPO_DESCRIPTION)
    path: str = Field(..., description="Path to the file or directory")
    branch: Optional[str] = Field(default=None, description="Branch to get contents from")


class CreateOrUpdateFileRequest(BaseModel):
    owner: str = Field(..., description=OWNER_DESCRIPTION)
    repo: str = Field(..., description=REPO_DESCRIPTION)
    path: str = Field(..., min_length=1, description="Path where to create/update the file")
    content: Optional[str] = Field(default=None, description="Content of the file")
    published_artifact_url: Optional[str] = Field(
        default=None,
        description="Public URL of a published artifact containing the file content in a single <code> block",
    )
    message: str = Field(..., description="Commit message")
    branch: str = Field(..., description="Branch to create/update the file in")
    sha: Optional[str] = Field(
        default=None,
        description="SHA of the file being replaced (required when updating existing files)",
    )

    @model_validator(mode="after")
    def check_single_content_source(self) -> "CreateOrUpdateFileRequest":
        if self.content is None and self.published_artifact_url is None:
            raise ValueError("Either 'content' or 'published_artifact_url' must be provided")
        if self.content is not None and self.published_artifact_url is not None:
            raise ValueError("Only one of 'content' or 'published_artifact_url' can be provided")
        return self


class PushFilesRequest(BaseModel):
    owner: str = Field(..., description=OWNER_DESCRIPTION)
    repo: str = Field(..., description=REPO_DESCRIPTION)
    branch: str = Field(..., description="Branch to push to (e.g., 'main' or 'master')")
    files: List[FileEdit] = Field(..., min_length=1, description="Array of files to push")
    message: str = Field(..., description="Commit message")


RequestT = TypeVar("RequestT", bound=BaseModel)


def parse_arguments(model: Type[RequestT], arguments: Mapping[str, Any]) -> RequestT:
    try:
        return model.model_validate(dict(arguments))
    except ValidationError as e:
        raise InvalidArgumentError(f"Invalid arguments for {model.__name__}: {e}") from e


async def get_file_contents(
    arguments: Mapping[str, Any], service: Optional[GitHubFilesService] = None
) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
    """Get the contents of a file or directory from a repository."""
    request = parse_arguments(GetFileContentsRequest, arguments)
    service = service or GitHubFilesService()

    result = await service.get_file_contents(
        request.owner, request.repo, request.path, request.branch
    )
    if isinstance(result, list):
        return [entry.model_dump() for entry in result]
    return result.model_dump()


async def create_or_update_file(
    arguments: Mapping[str, Any], service: Optional[GitHubFilesService] = None
) -> Dict[str, Any]:
    """Create or update a single file in a repository."""
    request = parse_arguments(CreateOrUpdateFileRequest, arguments)
    service = service or GitHubFilesService()

    result = await service.create_or_update_file(
        request.owner,
        request.repo,
        request.path,
        message=request.message,
        branch=request.branch,
        content=request.content,
        document_url=request.published_artifact_url,
        sha=request.sha,
    )
    return result.model_dump()


async def push_files(
    arguments: Mapping[str, Any], service: Optional[GitHubFilesService] = None
) -> Dict[str, Any]:
    """Push multiple files to a repository in a single commit."""
    request = parse_arguments(PushFilesRequest, arguments)
    service = service or GitHubFilesService()

    reference = await service.push_files(
        request.owner, request.repo, request.branch, request.files, request.message
    )
    logger.info(
        f"Pushed {len(request.files)} file(s) to {request.owner}/{request.repo}@{request.branch}"
    )
    return reference.model_dump()


TOOL_HANDLERS = {
    "get_file_contents": get_file_contents,
    "create_or_update_file": create_or_update_file,
    "push_files": push_files,
}

TOOL_DEFINITIONS = [
    {
        "name": "get_file_contents",
        "description": "Get the contents of a file or directory from a GitHub repository",
        "input_schema": GetFileContentsRequest.model_json_schema(),
    },
    {
        "name": "create_or_update_file",
        "description": "Create or update a single file in a GitHub repository",
        "input_schema": CreateOrUpdateFileRequest.model_json_schema(),
    },
    {
        "name": "push_files",
        "description": "Push multiple files to a GitHub repository in a single commit",
        "input_schema": PushFilesRequest.model_json_schema(),
    },
]


async def call_tool(
    name: str, arguments: Mapping[str, Any], service: Optional[GitHubFilesService] = None
) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
    """Dispatch a tool call by name."""
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        raise InvalidArgumentError(f"Unknown tool: {name}")
    return await handler(arguments, service=service)
