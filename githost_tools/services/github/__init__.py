"""
GitHub Service Package

Repository file operations over the GitHub REST API.

Main Components:
- GitHubFilesService: Facade for reading files and writing commits
- API: Transport client, contents and Git data operations
- Files: Content resolution, single-file writes, multi-file pushes
"""

from githost_tools.services.github.github_service import GitHubFilesService

__all__ = ["GitHubFilesService"]
