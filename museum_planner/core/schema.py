"""
Database schema for the Museum Curator Planner.

Shared by scripts/init_db.py, the CLI and the test fixtures so every
database is created from the same statements.
"""

import sqlite3
from pathlib import Path
from typing import List

CATEGORY_CHECK = (
    "CHECK(category IN ('exhibition', 'education', 'collection', "
    "'publication', 'research', 'admin'))"
)

TABLE_NAMES = ("projects", "tasks", "work_logs", "budget_items")

SCHEMA_STATEMENTS: List[str] = [
    f"""
    CREATE TABLE IF NOT EXISTS projects (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT DEFAULT 'default_user',
        title TEXT NOT NULL,
        description TEXT,
        category TEXT NOT NULL {CATEGORY_CHECK},
        status TEXT DEFAULT 'planning'
            CHECK(status IN ('planning', 'in_progress', 'completed', 'on_hold')),
        start_date DATE,
        end_date DATE,
        budget INTEGER DEFAULT 0,
        spent INTEGER DEFAULT 0,
        created_at DATETIME DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now', 'utc')),
        updated_at DATETIME DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now', 'utc'))
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_projects_status ON projects(status);",
    "CREATE INDEX IF NOT EXISTS idx_projects_updated ON projects(updated_at DESC);",
    f"""
    CREATE TABLE IF NOT EXISTS tasks (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        project_id INTEGER,
        title TEXT NOT NULL,
        description TEXT,
        category TEXT NOT NULL {CATEGORY_CHECK},
        priority INTEGER DEFAULT 3 CHECK(priority BETWEEN 1 AND 5),
        urgency_score REAL,
        estimated_hours REAL,
        actual_hours REAL,
        due_date DATE,
        status TEXT DEFAULT 'pending'
            CHECK(status IN ('pending', 'in_progress', 'completed', 'paused', 'cancelled')),
        completed_at DATETIME,
        created_at DATETIME DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now', 'utc')),
        FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_tasks_project ON tasks(project_id);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_priority ON tasks(priority DESC, due_date ASC);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status);",
    """
    CREATE TABLE IF NOT EXISTS work_logs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        task_id INTEGER NOT NULL,
        start_time DATETIME NOT NULL,
        end_time DATETIME,
        duration_minutes REAL,
        status TEXT CHECK(status IN ('in_progress', 'completed', 'paused')),
        notes TEXT,
        created_at DATETIME DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now', 'utc')),
        FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_work_logs_start ON work_logs(start_time DESC);",
    f"""
    CREATE TABLE IF NOT EXISTS budget_items (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        project_id INTEGER,
        category TEXT NOT NULL {CATEGORY_CHECK},
        item_name TEXT NOT NULL,
        amount INTEGER NOT NULL,
        spent INTEGER DEFAULT 0,
        transaction_date DATE,
        notes TEXT,
        created_at DATETIME DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now', 'utc')),
        FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_budget_category ON budget_items(category);",
]


def create_schema(conn: sqlite3.Connection) -> None:
    """Create all tables and indexes on an open connection."""
    cursor = conn.cursor()
    cursor.execute("PRAGMA foreign_keys = ON;")
    for statement in SCHEMA_STATEMENTS:
        cursor.execute(statement)
    conn.commit()


def seed_sample_data(conn: sqlite3.Connection) -> None:
    """Insert a small set of sample projects, tasks and budget items."""
    cursor = conn.cursor()
    cursor.executemany(
        """INSERT INTO projects
           (title, description, category, status, start_date, end_date, budget, spent)
           VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
        [
            ("World Heritage Touring Exhibition", "Touring show of UNESCO heritage sites",
             "exhibition", "in_progress", "2025-01-15", "2025-03-31", 15000000, 8500000),
            ("Children's Art Education Program", "Hands-on art classes for primary schools",
             "education", "planning", "2025-02-01", "2025-02-28", 3000000, 500000),
            ("Joseon Porcelain Study", "Research on Joseon white porcelain",
             "research", "in_progress", "2025-01-01", "2025-06-30", 5000000, 2000000),
        ],
    )
    cursor.executemany(
        """INSERT INTO tasks
           (project_id, title, category, priority, estimated_hours, due_date, status)
           VALUES (?, ?, ?, ?, ?, ?, ?)""",
        [
            (1, "Write exhibition labels in three languages", "exhibition", 5, 2, "2025-12-04", "pending"),
            (1, "Draft 10 SNS posts for the exhibition", "exhibition", 4, 1, "2025-12-05", "pending"),
            (2, "Publish call for education program participants", "education", 3, 0.5, "2025-12-10", "pending"),
            (3, "Write first draft of research paper", "research", 2, 8, "2025-12-20", "pending"),
        ],
    )
    cursor.executemany(
        """INSERT INTO budget_items (project_id, category, item_name, amount, spent)
           VALUES (?, ?, ?, ?, ?)""",
        [
            (1, "exhibition", "Venue rental", 5000000, 5000000),
            (1, "exhibition", "Promotional materials", 2000000, 1500000),
            (1, "exhibition", "Artwork shipping", 3000000, 2000000),
        ],
    )
    conn.commit()


def initialize_database(db_path: Path, seed: bool = False) -> List[str]:
    """
    Create a database file with the full schema.

    The parent directory is created when missing; an existing file is
    left in place and only missing tables are added.

    Returns:
        Names of the tables in the database
    """
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    try:
        create_schema(conn)
        if seed:
            seed_sample_data(conn)
        rows = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' "
            "AND name NOT LIKE 'sqlite_%' ORDER BY name"
        ).fetchall()
        return [row[0] for row in rows]
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
