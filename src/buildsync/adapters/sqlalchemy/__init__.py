"""SQLAlchemy adapter package for buildsync."""

from __future__ import annotations

from .engine import StartupError, configured_engine, is_started, shutdown, startup
from .job_store import SqlAlchemyJobStore
from .mappings import create_all_tables, job_table, mapper_registry, start_mappers

__all__ = [
    "SqlAlchemyJobStore",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "job_table",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
