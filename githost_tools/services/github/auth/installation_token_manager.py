"""
GitHub App installation access tokens.

Tokens are cached per installation and refreshed shortly before they expire.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

import httpx

from githost_common.config.config import (
    GH_USER_AGENT,
    GITHUB_API_URL,
    GITHUB_API_VERSION,
)
from githost_tools.services.github.auth.jwt_generator import GitHubAppJWTGenerator
from githost_tools.services.github.errors import RemoteError

logger = logging.getLogger(__name__)

EXPIRY_BUFFER_SECONDS = 300


@dataclass
class InstallationToken:
    token: str
    expires_at: str  # ISO 8601, e.g. "2026-10-18T12:00:00Z"

    def is_expired(self, buffer_seconds: int = EXPIRY_BUFFER_SECONDS) -> bool:
        try:
            expires_at = datetime.fromisoformat(self.expires_at.replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Unparseable token expiration: {self.expires_at}")
            return True
        now = datetime.now(expires_at.tzinfo)
        return (expires_at - now).total_seconds() <= buffer_seconds


class InstallationTokenManager:
    """Mints and caches installation access tokens."""

    def __init__(
        self,
        jwt_generator: Optional[GitHubAppJWTGenerator] = None,
        base_url: str = GITHUB_API_URL,
    ):
        self._jwt_generator = jwt_generator
        self.base_url = base_url
        self._token_cache: Dict[int, InstallationToken] = {}
        self._cache_lock = asyncio.Lock()

    @property
    def jwt_generator(self) -> GitHubAppJWTGenerator:
        if self._jwt_generator is None:
            self._jwt_generator = GitHubAppJWTGenerator()
        return self._jwt_generator

    async def get_installation_token(self, installation_id: int) -> str:
        """Return a valid installation token, requesting a new one if needed.

        Args:
            installation_id: GitHub App installation ID

        Returns:
            Installation access token

        Raises:
            RemoteError: If GitHub refuses to issue a token
        """
        async with self._cache_lock:
            cached = self._token_cache.get(installation_id)
            if cached and not cached.is_expired():
                logger.debug(f"Using cached installation token for installation {installation_id}")
                return cached.token

            logger.info(f"Requesting new installation token for installation {installation_id}")
            token = await self._request_installation_token(installation_id)
            self._token_cache[installation_id] = token
            return token.token

    async def _request_installation_token(self, installation_id: int) -> InstallationToken:
        url = f"{self.base_url}/app/installations/{installation_id}/access_tokens"
        headers = {
            "Authorization": f"Bearer {self.jwt_generator.generate_jwt()}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": GH_USER_AGENT,
        }

        try:
            timeout_config = httpx.Timeout(30.0, connect=10.0)
            async with httpx.AsyncClient(timeout=timeout_config, trust_env=False) as client:
                response = await client.post(url, json={}, headers=headers)
        except httpx.RequestError as e:
            error_msg = f"Network error requesting installation token: {e}"
            logger.error(error_msg)
            raise RemoteError(error_msg, url=url) from e

        if response.status_code != 201:
            error_msg = (
                f"Failed to get installation token (status {response.status_code}): {response.text}"
            )
            logger.error(error_msg)
            raise RemoteError(error_msg, status_code=response.status_code, url=url)

        data = response.json()
        logger.info(
            f"Obtained installation token for installation {installation_id} "
            f"(expires at {data['expires_at']})"
        )
        return InstallationToken(token=data["token"], expires_at=data["expires_at"])

    def clear_cache(self, installation_id: Optional[int] = None) -> None:
        if installation_id is None:
            self._token_cache.clear()
        else:
            self._token_cache.pop(installation_id, None)
