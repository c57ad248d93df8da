"""Tests for GitHubFilesService wiring."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from githost_tools.services.github.errors import InvalidArgumentError
from githost_tools.services.github.github_service import GitHubFilesService
from githost_tools.services.github.models.types import FileEdit
from tests.fixtures.github_payloads import (
    create_commit_payload,
    create_file_write_payload,
    create_reference_payload,
    create_tree_payload,
)


def make_client():
    client = MagicMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.put = AsyncMock()
    client.patch = AsyncMock()
    client.fetch_text = AsyncMock()
    return client


class TestCreateOrUpdateFile:
    """Test GitHubFilesService.create_or_update_file function."""

    @pytest.mark.asyncio
    async def test_content_from_published_artifact(self):
        client = make_client()
        client.fetch_text.return_value = "<pre><code>x = &quot;1&quot;</code></pre>"
        client.put.return_value = create_file_write_payload(path="app.py")
        service = GitHubFilesService(client=client)

        result = await service.create_or_update_file(
            "octo", "demo", "app.py", "Add app", "main",
            document_url="https://example.com/a", sha="known",
        )

        assert result.commit.sha == "commit-sha-2"
        client.get.assert_not_called()
        body = client.put.call_args.kwargs["data"]
        assert body["sha"] == "known"
        assert body["content"] == "eCA9ICIxIg=="

    @pytest.mark.asyncio
    async def test_invalid_sources_make_no_requests(self):
        client = make_client()
        service = GitHubFilesService(client=client)

        with pytest.raises(InvalidArgumentError):
            await service.create_or_update_file("octo", "demo", "a.txt", "m", "main")

        client.fetch_text.assert_not_called()
        client.get.assert_not_called()
        client.put.assert_not_called()


class TestPushFiles:
    """Test GitHubFilesService.push_files function."""

    @pytest.mark.asyncio
    async def test_push_files_uses_shared_client(self):
        client = make_client()
        client.get.return_value = create_reference_payload(sha="C0")
        client.post.side_effect = [create_tree_payload(sha="T1"), create_commit_payload(sha="C1")]
        client.patch.return_value = create_reference_payload(sha="C1")
        service = GitHubFilesService(client=client)

        reference = await service.push_files(
            "octo", "demo", "main", [FileEdit(path="a.txt", content="A")], "Add a"
        )

        assert reference.object.sha == "C1"
        assert service.contents.client is service.git_data.client is client
