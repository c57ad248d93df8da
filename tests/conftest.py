"""Pytest configuration for tests.

Sets up Python path and keeps local GitHub credentials out of unit tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path so imports work correctly
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def isolate_github_credentials(monkeypatch):
    """Ignore any installation ID or token configured in the developer's environment."""
    monkeypatch.setattr(
        "githost_tools.services.github.api.client.GITHUB_APP_INSTALLATION_ID", None
    )
    monkeypatch.setattr(
        "githost_tools.services.github.api.client.GITHUB_PERSONAL_ACCESS_TOKEN", None
    )
