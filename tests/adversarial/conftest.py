"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for race condition tests.
"""

import pytest

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture(autouse=True)
def _clean(clean_database: None) -> None:
    """Clean tables before each test."""
