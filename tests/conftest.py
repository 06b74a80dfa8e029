"""
Pytest configuration and fixtures for filetree tests.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

# Check for pytest-asyncio
try:
    import pytest_asyncio
    HAS_PYTEST_ASYNCIO = True
except ImportError:
    HAS_PYTEST_ASYNCIO = False


def pytest_collection_modifyitems(config, items):
    """Skip async tests if pytest-asyncio is not installed."""
    if HAS_PYTEST_ASYNCIO:
        return

    import asyncio
    skip_asyncio = pytest.mark.skip(
        reason="pytest-asyncio not installed - async tests require pytest-asyncio"
    )
    for item in items:
        if asyncio.iscoroutinefunction(item.function):
            item.add_marker(skip_asyncio)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    # Cleanup
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_tree(temp_dir: Path) -> Path:
    """
    Create a sample tree:

        root/
            readme.txt
            data.json
            settings.toml
            .gitignore
            sub/
                nested.txt
                deeper/
                    leaf.json
    """
    root = temp_dir / "root"
    root.mkdir(parents=True, exist_ok=True)

    (root / "readme.txt").write_text("Hello World")
    (root / "data.json").write_text('{"key": "value"}')
    (root / "settings.toml").write_text('title = "demo"\n')
    (root / ".gitignore").write_text("*.pyc\n")

    sub = root / "sub"
    sub.mkdir()
    (sub / "nested.txt").write_text("Nested content")

    deeper = sub / "deeper"
    deeper.mkdir()
    (deeper / "leaf.json").write_text("[1, 2, 3]")

    return root


@pytest.fixture(autouse=True)
def isolated_config(temp_dir: Path, monkeypatch):
    """Point configuration at a throwaway file and reset module state."""
    for key in ("FILETREE_ENCODING", "FILETREE_JSON_INDENT", "FILETREE_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("FILETREE_CONFIG_FILE", str(temp_dir / "filetree.json"))

    import filetree.Config as config_module
    config_module._manager = None

    yield

    config_module._manager = None
