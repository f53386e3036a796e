"""
Shared fixtures for infra tests.

All tests use real filesystem operations with temporary directories.
No mocking - we test actual behavior.
"""

import pytest


@pytest.fixture
def log_dir(tmp_path):
    """Create a temp directory for logs."""
    log_path = tmp_path / "logs"
    log_path.mkdir()
    return log_path
