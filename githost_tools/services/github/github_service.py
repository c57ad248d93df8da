"""
GitHub files service - single entry point for repository file operations.

Wires the contents reader, the single-file writer and the multi-file push
orchestrator to one shared API client.
"""

from typing import Optional, Sequence

from githost_tools.services.github.api.client import GitHubAPIClient
from githost_tools.services.github.api.contents import ContentsOperations
from githost_tools.services.github.api.git_data import GitDataOperations
from githost_tools.services.github.files.content_resolver import ContentResolver
from githost_tools.services.github.files.push_orchestrator import MultiFilePushOrchestrator
from githost_tools.services.github.files.single_file_writer import SingleFileWriter
from githost_tools.services.github.models.types import (
    CreateOrUpdateFileResponse,
    FileContentsResult,
    FileEdit,
    GitHubReference,
)


class GitHubFilesService:
    """Read files and write commits on a GitHub repository."""

    def __init__(
        self,
        client: Optional[GitHubAPIClient] = None,
        token: Optional[str] = None,
        installation_id: Optional[int] = None,
    ):
        """Initialize GitHub files service.

        Args:
            client: API client to share (built from token/installation_id if omitted)
            token: Personal access token (defaults to config)
            installation_id: GitHub App installation ID
        """
        self.api_client = client or GitHubAPIClient(token=token, installation_id=installation_id)

        self.contents = ContentsOperations(client=self.api_client)
        self.git_data = GitDataOperations(client=self.api_client)
        self.resolver = ContentResolver(client=self.api_client)
        self.writer = SingleFileWriter(contents=self.contents)
        self.orchestrator = MultiFilePushOrchestrator(git_data=self.git_data)

    async def get_file_contents(
        self, owner: str, repo: str, path: str, branch: Optional[str] = None
    ) -> FileContentsResult:
        return await self.contents.get_file_contents(owner, repo, path, branch)

    async def create_or_update_file(
        self,
        owner: str,
        repo: str,
        path: str,
        message: str,
        branch: str,
        content: Optional[str] = None,
        document_url: Optional[str] = None,
        sha: Optional[str] = None,
    ) -> CreateOrUpdateFileResponse:
        """Write one file from literal content or a published document."""
        file_content = await self.resolver.resolve(content=content, document_url=document_url)
        return await self.writer.write(owner, repo, path, file_content, message, branch, sha=sha)

    async def push_files(
        self,
        owner: str,
        repo: str,
        branch: str,
        files: Sequence[FileEdit],
        message: str,
        force: bool = True,
    ) -> GitHubReference:
        """Push several files to ``branch`` as one commit."""
        return await self.orchestrator.push(owner, repo, branch, files, message, force=force)
