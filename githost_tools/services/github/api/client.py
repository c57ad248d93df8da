"""
GitHub API client for making authenticated requests.
Supports both personal access tokens and GitHub App installation tokens.
"""

import logging
import re
from typing import Any, Dict, Optional, Union

import httpx

from githost_common.config.config import (
    GH_CONNECT_TIMEOUT,
    GH_REQUEST_TIMEOUT,
    GH_USER_AGENT,
    GITHUB_API_URL,
    GITHUB_API_VERSION,
    GITHUB_APP_INSTALLATION_ID,
    GITHUB_PERSONAL_ACCESS_TOKEN,
)
from githost_tools.services.github.auth.installation_token_manager import InstallationTokenManager
from githost_tools.services.github.errors import ConflictError, RemoteError

logger = logging.getLogger(__name__)

JSONResponse = Union[Dict[str, Any], list]

SUPPORTED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

# 422 bodies for a missing or stale blob sha, or a non-fast-forward ref update
CONFLICT_422_PATTERN = re.compile(
    r"\bsha\b\W*wasn't supplied|\bdoes not match\b|not a fast.forward", re.IGNORECASE
)


class GitHubAPIClient:
    """Base client for GitHub API interactions with dual-mode authentication."""

    def __init__(
        self,
        token: Optional[str] = None,
        installation_id: Optional[int] = None,
        base_url: Optional[str] = None,
        token_manager: Optional[InstallationTokenManager] = None,
    ):
        """Initialize GitHub API client.

        Args:
            token: Personal access token (defaults to GITHUB_PERSONAL_ACCESS_TOKEN)
            installation_id: GitHub App installation ID; takes precedence over token
            base_url: API root (defaults to GITHUB_API_URL)
            token_manager: Installation token manager (created on demand)
        """
        self.token = token or GITHUB_PERSONAL_ACCESS_TOKEN
        if installation_id is None:
            installation_id = GITHUB_APP_INSTALLATION_ID
        self.installation_id = installation_id
        self.base_url = (base_url or GITHUB_API_URL).rstrip("/")
        self._token_manager = token_manager

        if self.installation_id:
            logger.info(f"GitHub API client using installation ID: {self.installation_id}")
        elif not self.token:
            logger.warning("GitHub API client initialized without credentials - requests may fail")

    async def _get_token(self) -> Optional[str]:
        if self.installation_id:
            if self._token_manager is None:
                self._token_manager = InstallationTokenManager(base_url=self.base_url)
            return await self._token_manager.get_installation_token(self.installation_id)
        return self.token

    async def _get_headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": GH_USER_AGENT,
        }
        token = await self._get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _timeout(self) -> httpx.Timeout:
        return httpx.Timeout(GH_REQUEST_TIMEOUT, connect=GH_CONNECT_TIMEOUT)

    async def request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> JSONResponse:
        """Make a GitHub API request.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            path: API path relative to the API root
            data: JSON request body
            params: Query parameters

        Returns:
            Parsed JSON body ({} for empty responses)

        Raises:
            ConflictError: On 409, or a 422 about the sha or a non-fast-forward
            RemoteError: On any other non-2xx status or network failure
        """
        method_upper = method.upper()
        if method_upper not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = await self._get_headers()

        try:
            async with httpx.AsyncClient(timeout=self._timeout(), trust_env=False) as client:
                response = await client.request(
                    method_upper, url, headers=headers, json=data, params=params
                )
        except httpx.RequestError as e:
            error_msg = f"GitHub API request error: {e}"
            logger.error(error_msg)
            raise RemoteError(error_msg, url=url) from e

        return self._process_response(response, method_upper, url)

    def _process_response(self, response: httpx.Response, method: str, url: str) -> JSONResponse:
        if response.status_code in (200, 201, 204):
            logger.info(
                f"GitHub API {method} request to {url} "
                f"successful (status: {response.status_code})"
            )
            if not response.content:
                return {}
            return response.json()

        status = response.status_code
        error_msg = f"GitHub API request failed (status {status}): {response.text}"
        logger.error(error_msg)

        if status == 409 or (status == 422 and CONFLICT_422_PATTERN.search(response.text)):
            raise ConflictError(error_msg, status_code=status, url=url)
        raise RemoteError(error_msg, status_code=status, url=url)

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> JSONResponse:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, data: Optional[Dict[str, Any]] = None) -> JSONResponse:
        return await self.request("POST", path, data=data)

    async def put(self, path: str, data: Optional[Dict[str, Any]] = None) -> JSONResponse:
        return await self.request("PUT", path, data=data)

    async def patch(self, path: str, data: Optional[Dict[str, Any]] = None) -> JSONResponse:
        return await self.request("PATCH", path, data=data)

    async def fetch_text(self, url: str) -> str:
        """Download a public document as text, without GitHub credentials.

        Args:
            url: Absolute document URL

        Returns:
            Response body decoded as text

        Raises:
            RemoteError: On non-2xx status or network failure
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout(), trust_env=False, follow_redirects=True
            ) as client:
                response = await client.get(url, headers={"User-Agent": GH_USER_AGENT})
        except httpx.RequestError as e:
            error_msg = f"Document download error: {e}"
            logger.error(error_msg)
            raise RemoteError(error_msg, url=url) from e

        if not response.is_success:
            error_msg = f"Document download failed (status {response.status_code})"
            logger.error(f"{error_msg}: {url}")
            raise RemoteError(error_msg, status_code=response.status_code, url=url)

        return response.text
