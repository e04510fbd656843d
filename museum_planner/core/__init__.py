"""
Core module for the Museum Curator Planner
Contains database, configuration, schema, and model definitions
"""

from .config import Config
from .database import Database, SQLiteDatabase, get_database
from .models import (
    Task,
    Project,
    TASK_CATEGORIES,
    TASK_STATUSES,
    ACTIVE_STATUSES,
    PROJECT_STATUSES,
)
from .schema import create_schema, seed_sample_data, initialize_database

__all__ = [
    'Config',
    'Database',
    'SQLiteDatabase',
    'get_database',
    'Task',
    'Project',
    'TASK_CATEGORIES',
    'TASK_STATUSES',
    'ACTIVE_STATUSES',
    'PROJECT_STATUSES',
    'create_schema',
    'seed_sample_data',
    'initialize_database',
]
