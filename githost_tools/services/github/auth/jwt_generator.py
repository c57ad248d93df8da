"""
GitHub App JWT generation.

A short-lived RS256 JWT identifies the App itself; it is only used to mint
installation access tokens.
"""

import logging
import time
from pathlib import Path
from typing import Optional

import jwt

from githost_common.config.config import (
    GITHUB_APP_ID,
    GITHUB_APP_PRIVATE_KEY_CONTENT,
    GITHUB_APP_PRIVATE_KEY_PATH,
)

logger = logging.getLogger(__name__)

MAX_JWT_LIFETIME_SECONDS = 600


class GitHubAppJWTGenerator:
    """Generates JWT tokens for GitHub App authentication."""

    def __init__(
        self,
        app_id: Optional[str] = None,
        private_key: Optional[str] = None,
        private_key_path: Optional[str] = None,
    ):
        """
        Args:
            app_id: GitHub App ID (defaults to config)
            private_key: PEM key content (defaults to GITHUB_APP_PRIVATE_KEY_CONTENT)
            private_key_path: Path to a .pem file, used when no key content is set
        """
        self.app_id = app_id or GITHUB_APP_ID
        self._private_key = private_key or GITHUB_APP_PRIVATE_KEY_CONTENT
        self.private_key_path = private_key_path or GITHUB_APP_PRIVATE_KEY_PATH

        if not self.app_id:
            raise ValueError("GitHub App ID is required. Set GITHUB_APP_ID in environment.")
        if not self._private_key and not self.private_key_path:
            raise ValueError(
                "GitHub App private key is required. Set GITHUB_APP_PRIVATE_KEY_CONTENT "
                "or GITHUB_APP_PRIVATE_KEY_PATH in environment."
            )

    def _load_private_key(self) -> str:
        if self._private_key:
            return self._private_key

        key_path = Path(self.private_key_path)
        if not key_path.exists():
            raise FileNotFoundError(f"GitHub App private key not found at: {key_path}")

        self._private_key = key_path.read_text()
        logger.info(f"Loaded GitHub App private key from {key_path}")
        return self._private_key

    def generate_jwt(self, expiration_seconds: int = MAX_JWT_LIFETIME_SECONDS) -> str:
        """Generate a signed JWT for the configured App.

        GitHub rejects tokens living longer than ten minutes, so the lifetime
        is clamped to that.

        Args:
            expiration_seconds: Requested lifetime in seconds

        Returns:
            Encoded JWT

        Raises:
            ValueError: If the lifetime is not positive
        """
        if expiration_seconds < 1:
            raise ValueError("Expiration must be at least 1 second")
        if expiration_seconds > MAX_JWT_LIFETIME_SECONDS:
            logger.warning(
                f"Requested JWT lifetime {expiration_seconds}s exceeds GitHub's limit, "
                f"using {MAX_JWT_LIFETIME_SECONDS}s"
            )
            expiration_seconds = MAX_JWT_LIFETIME_SECONDS

        now = int(time.time())
        payload = {
            "iat": now,
            "exp": now + expiration_seconds,
            "iss": self.app_id,
        }
        return jwt.encode(payload, self._load_private_key(), algorithm="RS256")
