"""
Shared pytest fixtures and configuration for all tests.
"""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Add src directory to path so imports work without an install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from accountkit_token.logging import clear_strategy_context  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_strategy_context() -> Generator[None, None, None]:
    """Ensure no strategy name leaks between tests through the logging context."""
    yield
    clear_strategy_context()
