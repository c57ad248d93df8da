"""
GitHub API Module

Handles GitHub REST API interactions:
- Authenticated transport
- Repository contents
- Git data (references, trees, commits)
"""

from githost_tools.services.github.api.client import GitHubAPIClient
from githost_tools.services.github.api.contents import ContentsOperations
from githost_tools.services.github.api.git_data import GitDataOperations

__all__ = [
    "GitHubAPIClient",
    "ContentsOperations",
    "GitDataOperations",
]
