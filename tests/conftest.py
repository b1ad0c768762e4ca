"""Shared fixtures for GroupDrag Toolkit tests.

Provides the seed table used throughout the suite and isolates the user
configuration directory so tests never touch the real home directory.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from groupdrag_toolkit.config import ConfigManager
from groupdrag_toolkit.core.models import Row, TableState

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


SEED_RECORDS = [
    {"key": "1-1", "groupKey": "group-A", "groupSize": 3, "category": "A", "name": "Product A1", "count": 10, "sort": 1},
    {"key": "1-2", "groupKey": "group-A", "category": "A", "name": "Product A2", "count": 20, "sort": 2},
    {"key": "1-3", "groupKey": "group-A", "category": "A", "name": "Product A3", "count": 30, "sort": 3},
    {"key": "2-1", "groupKey": "group-B", "groupSize": 2, "category": "B", "name": "Product B1", "count": 5, "sort": 4},
    {"key": "2-2", "groupKey": "group-B", "category": "B", "name": "Product B2", "count": 15, "sort": 5},
    {"key": "3-1", "groupKey": "group-C", "groupSize": 1, "category": "C", "name": "Product C1", "count": 40, "sort": 6},
]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the user config directory at a temp dir and reload config per test."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("GROUPDRAG_CONFIG_DIR", str(config_dir))
    ConfigManager.reset()
    yield config_dir
    ConfigManager.reset()


@pytest.fixture
def seed_rows():
    """Six rows: group-A {1,2,3}, group-B {4,5}, group-C {6}."""
    return [Row.from_mapping(r) for r in SEED_RECORDS]


@pytest.fixture
def seed_state(seed_rows):
    return TableState(rows=list(seed_rows))


@pytest.fixture
def keys_of():
    def extract(rows):
        return {r.key: r.sort for r in rows}
    return extract
