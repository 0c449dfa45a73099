"""
Shared pytest fixtures for key-value store tests.
"""

import os
import tempfile

import pytest

from kvdb import Store


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def store_path(temp_dir):
    """Provide a path for a snapshot file."""
    return os.path.join(temp_dir, "mydb")


@pytest.fixture
def store(store_path):
    """Provide a fresh Store without fsync for speed."""
    return Store(store_path, fsync=False)


@pytest.fixture
def sample_entries():
    """Provide sample key-value entries for testing."""
    return {
        b"Hello": b"World",
        b"Name": b"Aziz",
        b"Age": b"25",
    }


@pytest.fixture
def all_bytes():
    """Every byte value 0-255 once."""
    return bytes(range(256))
