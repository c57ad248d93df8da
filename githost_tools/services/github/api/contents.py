"""
GitHub repository contents operations.

Reads files or directory listings and writes single files through the
contents API.
"""

import base64
import binascii
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from githost_tools.services.github.api.client import GitHubAPIClient, JSONResponse
from githost_tools.services.github.models.types import (
    FileContentsResult,
    GitHubFileContent,
    parse_file_contents,
)

logger = logging.getLogger(__name__)


def contents_path(owner: str, repo: str, path: str) -> str:
    return f"repos/{owner}/{repo}/contents/{quote(path.strip('/'))}"


def decode_file_content(file: GitHubFileContent) -> GitHubFileContent:
    """Return a copy of ``file`` with base64 content decoded to UTF-8 text.

    Binary or non-UTF-8 files are returned unchanged, still base64-encoded.
    """
    if not file.content or file.encoding not in (None, "base64"):
        return file
    try:
        decoded = base64.b64decode(file.content).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        logger.warning(f"Keeping {file.path} base64-encoded, content is not UTF-8 text: {e}")
        return file
    return file.model_copy(update={"content": decoded, "encoding": "utf-8"})


class ContentsOperations:
    """Handles GitHub repository contents operations."""

    def __init__(self, client: Optional[GitHubAPIClient] = None):
        """Initialize contents operations.

        Args:
            client: GitHub API client (creates new if not provided)
        """
        self.client = client or GitHubAPIClient()

    async def get_file_contents(
        self,
        owner: str,
        repo: str,
        path: str,
        branch: Optional[str] = None,
    ) -> FileContentsResult:
        """Get a file (with decoded content) or a directory listing.

        Args:
            owner: Repository owner
            repo: Repository name
            path: Path to a file or directory
            branch: Branch, tag or commit to read from (default branch if omitted)

        Returns:
            GitHubFileContent for a file, a list of GitHubDirectoryEntry for a directory

        Raises:
            RemoteError: If the request fails
            ResponseValidationError: If the response has an unexpected shape
        """
        data = await self.get_raw_contents(owner, repo, path, branch)
        if isinstance(data, list):
            return data
        return decode_file_content(data)

    async def get_raw_contents(
        self,
        owner: str,
        repo: str,
        path: str,
        branch: Optional[str] = None,
    ) -> FileContentsResult:
        """Like get_file_contents, but file content is left base64-encoded."""
        params = {"ref": branch} if branch else None
        response = await self.client.get(contents_path(owner, repo, path), params=params)
        return parse_file_contents(response)

    async def put_file(
        self,
        owner: str,
        repo: str,
        path: str,
        message: str,
        encoded_content: str,
        branch: str,
        sha: Optional[str] = None,
    ) -> JSONResponse:
        """Create or overwrite a file.

        ``sha`` must be the current blob SHA when the file already exists;
        GitHub treats its absence as a create.
        """
        body: Dict[str, Any] = {
            "message": message,
            "content": encoded_content,
            "branch": branch,
        }
        if sha:
            body["sha"] = sha

        return await self.client.put(contents_path(owner, repo, path), data=body)
