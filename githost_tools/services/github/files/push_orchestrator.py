"""Multi-file push as a single commit.

The push is a linear state machine::

    READ_HEAD -> BUILD_TREE -> BUILD_COMMIT -> UPDATE_REF -> DONE

Each stage consumes what the previous one stored on ``PushState``. A failure
leaves the state at the stage that failed; objects created before that stay
on the remote unreferenced. Re-running from READ_HEAD is always safe.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from githost_tools.services.github.api.git_data import GitDataOperations
from githost_tools.services.github.errors import (
    BranchNotFoundError,
    ConflictError,
    RemoteError,
)
from githost_tools.services.github.models.types import (
    FileEdit,
    GitHubReference,
    PushStage,
)

logger = logging.getLogger(__name__)

NEXT_STAGE = {
    PushStage.READ_HEAD: PushStage.BUILD_TREE,
    PushStage.BUILD_TREE: PushStage.BUILD_COMMIT,
    PushStage.BUILD_COMMIT: PushStage.UPDATE_REF,
    PushStage.UPDATE_REF: PushStage.DONE,
}


def branch_ref(branch: str) -> str:
    return f"heads/{branch}"


@dataclass
class PushState:
    owner: str
    repo: str
    branch: str
    edits: List[FileEdit]
    message: str
    force: bool = True
    stage: PushStage = PushStage.READ_HEAD
    head_sha: Optional[str] = None
    tree_sha: Optional[str] = None
    commit_sha: Optional[str] = None
    reference: Optional[GitHubReference] = field(default=None, repr=False)


class MultiFilePushOrchestrator:
    """Lands a set of file edits on a branch as one commit."""

    def __init__(self, git_data: Optional[GitDataOperations] = None):
        self.git_data = git_data or GitDataOperations()

    async def push(
        self,
        owner: str,
        repo: str,
        branch: str,
        edits: Sequence[FileEdit],
        message: str,
        force: bool = True,
    ) -> GitHubReference:
        """Commit ``edits`` on top of the current head of ``branch``.

        Args:
            owner: Repository owner
            repo: Repository name
            branch: Existing branch to push to
            edits: Files to add or replace; other files are kept
            message: Commit message
            force: Overwrite the branch even if it moved since it was read.
                When False, a moved branch raises ConflictError instead.

        Returns:
            The updated branch reference

        Raises:
            BranchNotFoundError: If the branch does not exist
            InvalidArgumentError: If edits are empty or repeat a path
            ConflictError: If ``force`` is False and the branch moved
            RemoteError: If any remote step fails
        """
        state = PushState(
            owner=owner,
            repo=repo,
            branch=branch,
            edits=list(edits),
            message=message,
            force=force,
        )
        await self.run(state)
        return state.reference

    async def run(self, state: PushState) -> PushState:
        """Advance ``state`` until DONE, starting from its current stage."""
        while state.stage is not PushStage.DONE:
            try:
                await self.advance(state)
            except Exception as e:
                logger.error(
                    f"Push to {state.owner}/{state.repo}@{state.branch} "
                    f"failed at {state.stage.value}: {e}"
                )
                raise
        return state

    async def advance(self, state: PushState) -> PushState:
        """Execute the current stage and move to the next one."""
        if state.stage is PushStage.READ_HEAD:
            state.head_sha = await self._read_head(state.owner, state.repo, state.branch)
        elif state.stage is PushStage.BUILD_TREE:
            tree = await self.git_data.create_tree(
                state.owner, state.repo, state.edits, base_tree=state.head_sha
            )
            state.tree_sha = tree.sha
        elif state.stage is PushStage.BUILD_COMMIT:
            commit = await self.git_data.create_commit(
                state.owner, state.repo, state.message, state.tree_sha, [state.head_sha]
            )
            state.commit_sha = commit.sha
        elif state.stage is PushStage.UPDATE_REF:
            if not state.force:
                await self._ensure_head_unchanged(state)
            state.reference = await self.git_data.update_reference(
                state.owner,
                state.repo,
                branch_ref(state.branch),
                state.commit_sha,
                force=state.force,
            )
        else:
            raise ValueError(f"Push already finished (stage {state.stage.value})")

        state.stage = NEXT_STAGE[state.stage]
        logger.debug(f"Push to {state.owner}/{state.repo}@{state.branch} now at {state.stage.value}")
        return state

    async def _read_head(self, owner: str, repo: str, branch: str) -> str:
        try:
            reference = await self.git_data.get_reference(owner, repo, branch_ref(branch))
        except RemoteError as e:
            if e.status_code == 404:
                raise BranchNotFoundError(
                    f"Branch '{branch}' not found in {owner}/{repo}",
                    status_code=404,
                    url=e.url,
                ) from e
            raise
        return reference.object.sha

    async def _ensure_head_unchanged(self, state: PushState) -> None:
        current_sha = await self._read_head(state.owner, state.repo, state.branch)
        if current_sha != state.head_sha:
            raise ConflictError(
                f"Branch '{state.branch}' moved from {state.head_sha} to {current_sha} during push"
            )
