"""Tests for GitDataOperations and tree entry building."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from githost_tools.services.github.api.git_data import GitDataOperations, build_tree_entries
from githost_tools.services.github.errors import (
    InvalidArgumentError,
    RemoteError,
    ResponseValidationError,
)
from githost_tools.services.github.models.types import FileEdit
from tests.fixtures.github_payloads import (
    create_commit_payload,
    create_reference_payload,
    create_tree_payload,
)


def make_git_data():
    client = MagicMock()
    client.get = AsyncMock(return_value=create_reference_payload(branch="feature/x"))
    client.post = AsyncMock()
    client.patch = AsyncMock(return_value=create_reference_payload(sha="C9"))
    return GitDataOperations(client=client), client


class TestBuildTreeEntries:
    """Test build_tree_entries function."""

    def test_order_is_preserved(self):
        edits = [FileEdit(path="z.txt", content="1"), FileEdit(path="a/b.txt", content="2")]
        assert [entry["path"] for entry in build_tree_entries(edits)] == ["z.txt", "a/b.txt"]

    def test_duplicates_are_named(self):
        edits = [
            FileEdit(path="a.txt", content="1"),
            FileEdit(path="b.txt", content="2"),
            FileEdit(path="a.txt", content="3"),
        ]
        with pytest.raises(InvalidArgumentError, match="a.txt"):
            build_tree_entries(edits)


class TestGitDataOperations:
    """Test GitDataOperations request bodies."""

    @pytest.mark.asyncio
    async def test_tree_without_base(self):
        git_data, client = make_git_data()
        client.post.return_value = create_tree_payload(sha="T5")

        tree = await git_data.create_tree("octo", "demo", [FileEdit(path="a.txt", content="A")])

        assert tree.sha == "T5"
        assert "base_tree" not in client.post.call_args.kwargs["data"]

    @pytest.mark.asyncio
    async def test_commit_keeps_given_parents(self):
        git_data, client = make_git_data()
        client.post.return_value = create_commit_payload(sha="M1", parents=["P1", "P2"])

        commit = await git_data.create_commit("octo", "demo", "Merge", "T1", ["P1", "P2"])

        assert client.post.call_args.kwargs["data"]["parents"] == ["P1", "P2"]
        assert [parent.sha for parent in commit.parents] == ["P1", "P2"]

    @pytest.mark.asyncio
    async def test_malformed_commit_response(self):
        git_data, client = make_git_data()
        client.post.return_value = {"sha": "C1"}

        with pytest.raises(ResponseValidationError):
            await git_data.create_commit("octo", "demo", "m", "T1", ["C0"])

    @pytest.mark.asyncio
    async def test_nested_branch_reference_paths(self):
        git_data, client = make_git_data()

        await git_data.get_reference("octo", "demo", "heads/feature/x")
        await git_data.update_reference("octo", "demo", "heads/feature/x", "C9")

        client.get.assert_awaited_once_with("repos/octo/demo/git/ref/heads/feature/x")
        client.patch.assert_awaited_once_with(
            "repos/octo/demo/git/refs/heads/feature/x", data={"sha": "C9", "force": True}
        )

    @pytest.mark.asyncio
    async def test_prefix_match_listing_is_not_found(self):
        git_data, client = make_git_data()
        client.get.return_value = [create_reference_payload(branch="feat/x")]

        with pytest.raises(RemoteError) as exc_info:
            await git_data.get_reference("octo", "demo", "heads/feat")

        assert exc_info.value.status_code == 404
