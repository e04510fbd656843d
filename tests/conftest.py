"""
Shared fixtures: a temporary SQLite database built from the production
schema and a Config rooted in a temporary directory.
"""

import sqlite3
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from museum_planner.core.config import Config
from museum_planner.core.database import Database
from museum_planner.core.schema import create_schema, seed_sample_data


@pytest.fixture
def temp_config(tmp_path):
    """Config with default settings in a temporary directory."""
    return Config(tmp_path / "config")


@pytest.fixture
def temp_db(tmp_path):
    """Empty database with the full schema."""
    db_file = tmp_path / "test.db"
    conn = sqlite3.connect(db_file)
    create_schema(conn)
    conn.close()
    return Database(db_file)


@pytest.fixture
def seeded_db(tmp_path):
    """Database with the sample projects, tasks and budget items."""
    db_file = tmp_path / "seeded.db"
    conn = sqlite3.connect(db_file)
    create_schema(conn)
    seed_sample_data(conn)
    conn.close()
    return Database(db_file)
