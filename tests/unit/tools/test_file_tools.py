"""Tests for the file tool entry points."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from githost_tools.services.github.errors import InvalidArgumentError
from githost_tools.services.github.models.types import (
    CreateOrUpdateFileResponse,
    FileEdit,
    GitHubDirectoryEntry,
    GitHubFileContent,
    GitHubReference,
)
from githost_tools.tools.file_tools import (
    TOOL_DEFINITIONS,
    call_tool,
    create_or_update_file,
    get_file_contents,
    push_files,
)
from tests.fixtures.github_payloads import (
    create_directory_payload,
    create_file_payload,
    create_file_write_payload,
    create_reference_payload,
)

BASE_ARGS = {"owner": "octo", "repo": "demo"}


def make_service():
    service = MagicMock()
    service.get_file_contents = AsyncMock()
    service.create_or_update_file = AsyncMock(
        return_value=CreateOrUpdateFileResponse.model_validate(create_file_write_payload())
    )
    service.push_files = AsyncMock(
        return_value=GitHubReference.model_validate(create_reference_payload(sha="C1"))
    )
    return service


class TestCreateOrUpdateFileTool:
    """Test create_or_update_file tool."""

    @pytest.mark.asyncio
    async def test_passes_artifact_url_as_document_url(self):
        service = make_service()
        arguments = {
            **BASE_ARGS,
            "path": "app.py",
            "published_artifact_url": "https://example.com/a",
            "message": "Add app",
            "branch": "main",
        }

        result = await create_or_update_file(arguments, service=service)

        assert result["commit"]["sha"] == "commit-sha-2"
        kwargs = service.create_or_update_file.call_args.kwargs
        assert kwargs["document_url"] == "https://example.com/a"
        assert kwargs["content"] is None
        assert kwargs["sha"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "sources",
        [{}, {"content": "x", "published_artifact_url": "https://example.com/a"}],
    )
    async def test_requires_exactly_one_source(self, sources):
        service = make_service()
        arguments = {**BASE_ARGS, "path": "a.txt", "message": "m", "branch": "main", **sources}

        with pytest.raises(InvalidArgumentError):
            await create_or_update_file(arguments, service=service)

        service.create_or_update_file.assert_not_called()


class TestPushFilesTool:
    """Test push_files tool."""

    @pytest.mark.asyncio
    async def test_files_become_file_edits(self):
        service = make_service()
        arguments = {
            **BASE_ARGS,
            "branch": "main",
            "files": [{"path": "a.txt", "content": "X"}, {"path": "b.txt", "content": "Y"}],
            "message": "Add files",
        }

        result = await push_files(arguments, service=service)

        assert result["object"]["sha"] == "C1"
        owner, repo, branch, files, message = service.push_files.call_args.args
        assert files == [FileEdit(path="a.txt", content="X"), FileEdit(path="b.txt", content="Y")]
        assert message == "Add files"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "files",
        [[], [{"path": "", "content": "x"}], [{"path": "a.txt"}]],
    )
    async def test_invalid_files_rejected(self, files):
        service = make_service()
        arguments = {**BASE_ARGS, "branch": "main", "files": files, "message": "m"}

        with pytest.raises(InvalidArgumentError):
            await push_files(arguments, service=service)

        service.push_files.assert_not_called()


class TestGetFileContentsTool:
    """Test get_file_contents tool."""

    @pytest.mark.asyncio
    async def test_file(self):
        service = make_service()
        service.get_file_contents.return_value = GitHubFileContent.model_validate(
            create_file_payload()
        )

        result = await get_file_contents({**BASE_ARGS, "path": "docs/readme.md"}, service=service)

        assert result["sha"] == "blob-sha-1"
        service.get_file_contents.assert_awaited_once_with("octo", "demo", "docs/readme.md", None)

    @pytest.mark.asyncio
    async def test_directory(self):
        service = make_service()
        service.get_file_contents.return_value = [
            GitHubDirectoryEntry.model_validate(entry) for entry in create_directory_payload()
        ]

        result = await get_file_contents(
            {**BASE_ARGS, "path": "src", "branch": "dev"}, service=service
        )

        assert [entry["path"] for entry in result] == ["src/a.py", "src/b.py"]


class TestCallTool:
    """Test call_tool dispatch."""

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        with pytest.raises(InvalidArgumentError):
            await call_tool("delete_repo", {}, service=make_service())

    @pytest.mark.asyncio
    async def test_dispatches_by_name(self):
        service = make_service()
        arguments = {
            **BASE_ARGS,
            "branch": "main",
            "files": [{"path": "a.txt", "content": "X"}],
            "message": "m",
        }

        result = await call_tool("push_files", arguments, service=service)

        assert result["ref"] == "refs/heads/main"

    def test_definitions_expose_input_schemas(self):
        names = [definition["name"] for definition in TOOL_DEFINITIONS]
        assert names == ["get_file_contents", "create_or_update_file", "push_files"]
        push_schema = TOOL_DEFINITIONS[2]["input_schema"]
        assert set(push_schema["required"]) == {"owner", "repo", "branch", "files", "message"}
