"""
Environment-driven configuration.

Values are read once at import time. Nothing here is mandatory: a missing
token only surfaces when a request is made without credentials.
"""

import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def get_float_env(key: str, default: float) -> float:
    """Get a float environment variable, falling back to default when unset or invalid."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def get_int_env(key: str, default: Optional[int] = None) -> Optional[int]:
    """Get an int environment variable, falling back to default when unset or invalid."""
    value = os.getenv(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


# GitHub API
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")
GITHUB_API_VERSION = os.getenv("GITHUB_API_VERSION", "2022-11-28")
GH_USER_AGENT = os.getenv("GH_USER_AGENT", "githost-tools")
GH_REQUEST_TIMEOUT = get_float_env("GH_REQUEST_TIMEOUT", 150.0)
GH_CONNECT_TIMEOUT = get_float_env("GH_CONNECT_TIMEOUT", 60.0)

# Personal access token authentication
GITHUB_PERSONAL_ACCESS_TOKEN = os.getenv("GITHUB_PERSONAL_ACCESS_TOKEN")

# GitHub App authentication
GITHUB_APP_ID = os.getenv("GITHUB_APP_ID")
GITHUB_APP_PRIVATE_KEY_PATH = os.getenv("GITHUB_APP_PRIVATE_KEY_PATH")
GITHUB_APP_PRIVATE_KEY_CONTENT = os.getenv("GITHUB_APP_PRIVATE_KEY_CONTENT")
GITHUB_APP_INSTALLATION_ID = get_int_env("GITHUB_APP_INSTALLATION_ID")
