#!/usr/bin/env python3
"""
Database initialization script for the Museum Curator Planner
Creates the SQLite database with projects, tasks, work logs and budget items

Usage:
    python scripts/init_db.py            # empty database
    python scripts/init_db.py --seed     # with sample exhibition data
"""

import os
import sqlite3
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from museum_planner.core.config import Config
from museum_planner.core.schema import initialize_database


def resolve_db_path() -> Path:
    env_path = os.environ.get("MUSEUM_PLANNER_DB")
    if env_path:
        return Path(env_path)
    return Config().get_database_path()


def init_database(seed: bool = False) -> bool:
    """Initialize the database, asking before replacing an existing file"""
    db_path = resolve_db_path()

    if db_path.exists():
        response = input(f"Database already exists at {db_path}. Overwrite? (yes/no): ")
        if response.lower() != 'yes':
            print("Aborting database initialization.")
            return False
        db_path.unlink()

    print(f"Creating database at {db_path}...")
    try:
        tables = initialize_database(db_path, seed=seed)
    except sqlite3.Error as e:
        print(f"✗ Database error: {e}")
        return False

    print("✓ Database schema created successfully!")
    print(f"✓ Database location: {db_path}")
    if seed:
        print("✓ Sample projects, tasks and budget items inserted")
    print(f"\n✓ Tables created: {', '.join(tables)}")
    return True


if __name__ == "__main__":
    print("=" * 60)
    print("Museum Curator Planner - Database Initialization")
    print("=" * 60)
    print()

    success = init_database(seed="--seed" in sys.argv[1:])

    print("\n" + "=" * 60)
    if success:
        print("Database initialization complete!")
        print("=" * 60)
        sys.exit(0)
    else:
        print("Database initialization failed!")
        print("=" * 60)
        sys.exit(1)
