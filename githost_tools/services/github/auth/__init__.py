"""
GitHub App Authentication Module

- JWT generation for the App
- Installation access token caching and refresh
"""

from githost_tools.services.github.auth.installation_token_manager import InstallationTokenManager
from githost_tools.services.github.auth.jwt_generator import GitHubAppJWTGenerator

__all__ = [
    "GitHubAppJWTGenerator",
    "InstallationTokenManager",
]
