"""
GitHub Git Data API operations: references, trees and commits.

These are the low-level building blocks of a multi-file commit. Each method
is a single request; sequencing lives in the push orchestrator.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

from githost_tools.services.github.api.client import GitHubAPIClient
from githost_tools.services.github.errors import InvalidArgumentError, RemoteError
from githost_tools.services.github.models.types import (
    FILE_MODE_REGULAR,
    TREE_ENTRY_BLOB,
    FileEdit,
    GitHubCommit,
    GitHubReference,
    GitHubTree,
    parse_response,
)

logger = logging.getLogger(__name__)


def build_tree_entries(edits: Sequence[FileEdit]) -> List[Dict[str, str]]:
    """Map edits to inline-content blob entries, preserving order.

    Raises:
        InvalidArgumentError: If there are no edits or a path appears twice
    """
    if not edits:
        raise InvalidArgumentError("At least one file is required to build a tree")

    seen = set()
    duplicates = []
    for edit in edits:
        if edit.path in seen and edit.path not in duplicates:
            duplicates.append(edit.path)
        seen.add(edit.path)
    if duplicates:
        raise InvalidArgumentError(f"Duplicate file paths in push: {', '.join(duplicates)}")

    return [
        {
            "path": edit.path,
            "mode": FILE_MODE_REGULAR,
            "type": TREE_ENTRY_BLOB,
            "content": edit.content,
        }
        for edit in edits
    ]


class GitDataOperations:
    """Handles GitHub Git Data API operations."""

    def __init__(self, client: Optional[GitHubAPIClient] = None):
        self.client = client or GitHubAPIClient()

    async def get_reference(self, owner: str, repo: str, ref: str) -> GitHubReference:
        """Read exactly the reference ``ref``, such as ``heads/main``.

        Raises:
            RemoteError: With status 404 if ``ref`` does not exist, even when
                other references share it as a prefix
        """
        path = f"repos/{owner}/{repo}/git/ref/{quote(ref)}"
        response = await self.client.get(path)
        if isinstance(response, list):
            # prefix matches only, e.g. heads/feat when just heads/feat/x exists
            raise RemoteError(f"Reference {ref} not found", status_code=404, url=path)
        return parse_response(GitHubReference, response)

    async def create_tree(
        self,
        owner: str,
        repo: str,
        edits: Sequence[FileEdit],
        base_tree: Optional[str] = None,
    ) -> GitHubTree:
        """Create a tree from ``edits`` layered over ``base_tree``.

        Paths in ``edits`` replace or add entries; everything else in the
        base tree is kept. GitHub accepts a commit SHA as ``base_tree``.

        Args:
            owner: Repository owner
            repo: Repository name
            edits: Files to write
            base_tree: Tree (or commit) SHA to build on; None for a fresh tree

        Returns:
            The created tree
        """
        body: Dict[str, Any] = {"tree": build_tree_entries(edits)}
        if base_tree:
            body["base_tree"] = base_tree

        response = await self.client.post(f"repos/{owner}/{repo}/git/trees", data=body)
        tree = parse_response(GitHubTree, response)
        logger.info(f"Created tree {tree.sha} with {len(edits)} file(s) in {owner}/{repo}")
        return tree

    async def create_commit(
        self,
        owner: str,
        repo: str,
        message: str,
        tree_sha: str,
        parent_shas: Sequence[str],
    ) -> GitHubCommit:
        """Create a commit pointing at ``tree_sha`` with exactly ``parent_shas`` as parents."""
        body = {
            "message": message,
            "tree": tree_sha,
            "parents": list(parent_shas),
        }
        response = await self.client.post(f"repos/{owner}/{repo}/git/commits", data=body)
        commit = parse_response(GitHubCommit, response)
        logger.info(f"Created commit {commit.sha} on tree {tree_sha} in {owner}/{repo}")
        return commit

    async def update_reference(
        self,
        owner: str,
        repo: str,
        ref: str,
        sha: str,
        force: bool = True,
    ) -> GitHubReference:
        """Move ``ref`` (e.g. ``heads/main``) to ``sha``.

        With ``force`` the update overwrites whatever the ref points at, even
        if that discards commits.
        """
        body = {"sha": sha, "force": force}
        response = await self.client.patch(
            f"repos/{owner}/{repo}/git/refs/{quote(ref)}", data=body
        )
        reference = parse_response(GitHubReference, response)
        logger.info(f"Updated {ref} in {owner}/{repo} to {sha} (force={force})")
        return reference
