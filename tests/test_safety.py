"""Safety tests to ensure the test suite doesn't touch real session state.

These tests verify that running the test suite does NOT modify:
- ./data directory (config and the stored auth token)

All tests MUST use temporary directories via pytest fixtures.
"""

import hashlib
import os
from pathlib import Path

import pytest


def _hash_directory(path: Path) -> str | None:
    """Create a hash of directory structure and file contents.

    Returns None if directory doesn't exist.
    """
    if not path.exists():
        return None

    hasher = hashlib.sha256()

    for root, dirs, files in os.walk(path):
        # Sort for consistent ordering
        dirs.sort()
        files.sort()

        for filename in files:
            filepath = Path(root) / filename
            rel_path = filepath.relative_to(path)
            hasher.update(str(rel_path).encode())

            stat = filepath.stat()
            hasher.update(str(stat.st_size).encode())
            hasher.update(str(int(stat.st_mtime)).encode())

    return hasher.hexdigest()


class TestDataDirectorySafety:
    """Tests ensuring ./data is never modified by test suite."""

    @pytest.fixture(scope="class")
    def data_dir_state_before(self):
        """Capture state of ./data before tests."""
        data_path = Path("data")
        return {
            "exists": data_path.exists(),
            "hash": _hash_directory(data_path),
        }

    def test_data_directory_not_modified(self, data_dir_state_before):
        """Test suite should not modify ./data if it existed."""
        data_path = Path("data")

        if data_dir_state_before["exists"]:
            current_hash = _hash_directory(data_path)
            if current_hash != data_dir_state_before["hash"]:
                pytest.fail(
                    "./data directory was modified during test run. "
                    "All tests MUST use temporary directories. "
                    "Never log in or out against ./data/state in tests."
                )


class TestTestIsolation:
    """Meta-tests ensuring CLI tests redirect the token file."""

    def test_cli_tests_use_temp_token_file(self):
        """CLI tests must point auth.token_file at tmp_path."""
        test_file = Path("tests/f6/test_cli.py")
        if not test_file.exists():
            pytest.skip("CLI tests not present")

        content = test_file.read_text()
        assert "tmp_path" in content
        assert "token_file" in content
