"""Create or update one file through the contents API."""

import base64
import logging
from typing import Optional

from githost_tools.services.github.api.contents import ContentsOperations
from githost_tools.services.github.errors import GitHubToolError
from githost_tools.services.github.models.types import (
    CreateOrUpdateFileResponse,
    ShaLookup,
    ShaLookupStatus,
    parse_response,
)

logger = logging.getLogger(__name__)


def encode_content(content: str) -> str:
    return base64.b64encode(content.encode("utf-8")).decode("ascii")


class SingleFileWriter:
    """Writes a single file, discovering the current blob SHA when not given."""

    def __init__(self, contents: Optional[ContentsOperations] = None):
        self.contents = contents or ContentsOperations()

    async def lookup_sha(self, owner: str, repo: str, path: str, branch: str) -> ShaLookup:
        """Find the current blob SHA of ``path`` on ``branch``.

        A failed read means the file is treated as new; the error is logged
        and reported in the result, never raised.
        """
        try:
            existing = await self.contents.get_raw_contents(owner, repo, path, branch)
        except GitHubToolError as e:
            if getattr(e, "status_code", None) == 404:
                logger.info(f"{path} does not exist on {branch}, will create new file")
                return ShaLookup(status=ShaLookupStatus.NOT_FOUND)
            logger.warning(f"Could not read {path} on {branch}, treating as new file: {e}")
            return ShaLookup(status=ShaLookupStatus.ERROR_IGNORED, error=str(e))

        if isinstance(existing, list):
            logger.info(f"{path} on {branch} is a directory, no file sha to reuse")
            return ShaLookup(status=ShaLookupStatus.NOT_FOUND)

        return ShaLookup(status=ShaLookupStatus.FOUND, sha=existing.sha)

    async def write(
        self,
        owner: str,
        repo: str,
        path: str,
        content: str,
        message: str,
        branch: str,
        sha: Optional[str] = None,
    ) -> CreateOrUpdateFileResponse:
        """Create ``path`` or overwrite it with ``content`` in one commit.

        Args:
            owner: Repository owner
            repo: Repository name
            path: File path in the repository
            content: New file content
            message: Commit message
            branch: Branch to commit to
            sha: Current blob SHA; looked up when omitted

        Returns:
            The written file and the commit that wrote it

        Raises:
            ConflictError: If the file exists and no valid sha was sent
            RemoteError: If the write fails
            ResponseValidationError: If the response has an unexpected shape
        """
        encoded_content = encode_content(content)

        current_sha = sha
        if not current_sha:
            lookup = await self.lookup_sha(owner, repo, path, branch)
            current_sha = lookup.sha

        response = await self.contents.put_file(
            owner,
            repo,
            path,
            message=message,
            encoded_content=encoded_content,
            branch=branch,
            sha=current_sha,
        )
        result = parse_response(CreateOrUpdateFileResponse, response)
        result.created = current_sha is None
        action = "Updated" if current_sha else "Created"
        logger.info(f"{action} {path} on {owner}/{repo}@{branch} in commit {result.commit.sha}")
        return result
