"""
Database Connection and Session Management
Uses PostgreSQL with asyncpg (SQLite with aiosqlite for local runs and tests)
"""

import logging
import sqlite3
from typing import Optional

import asyncpg
from databases import Database
from sqlalchemy import JSON, create_engine, MetaData
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base
from clubhub.config import settings

logger = logging.getLogger(__name__)

# Database URL
DATABASE_URL = settings.DATABASE_URL

# For Supabase connection pooler (pgbouncer), disable prepared statements
if DATABASE_URL.startswith("sqlite"):
    db_options = {}
elif "supabase.com" in DATABASE_URL or "pooler.supabase.com" in DATABASE_URL:
    db_options = {"min_size": 1, "max_size": 5, "statement_cache_size": 0}
else:
    db_options = {"min_size": 1, "max_size": 10}

# Create database instance for async queries
database = Database(DATABASE_URL, **db_options)

# Create SQLAlchemy engine for migrations and schema setup
engine = create_engine(
    DATABASE_URL.replace("postgresql://", "postgresql+psycopg2://")
    if "postgresql://" in DATABASE_URL else DATABASE_URL
)


# Metadata for models
metadata = MetaData()

# Base class for models
Base = declarative_base(metadata=metadata)

# JSON documents (positions, questions, answers...) are JSONB on PostgreSQL
JSONType = JSON().with_variant(JSONB(), "postgresql")

# Driver errors raised when an INSERT/UPDATE hits a constraint
INTEGRITY_ERRORS = (asyncpg.exceptions.IntegrityConstraintViolationError, sqlite3.IntegrityError)


def is_unique_violation(exc: Exception) -> bool:
    """True when a driver error was caused by a unique index, not e.g. NOT NULL"""
    if isinstance(exc, asyncpg.exceptions.UniqueViolationError):
        return True
    return isinstance(exc, sqlite3.IntegrityError) and "UNIQUE" in str(exc).upper()


def as_dict(row) -> Optional[dict]:
    """Convert a database record to a plain dict"""
    if row is None:
        return None
    return dict(row._mapping)


def nest_prefixed(row: dict, prefix: str) -> dict:
    """
    Move columns aliased as '<prefix>__<column>' into a nested dict

    Used for joined summaries, e.g. 'event__title' -> row['event']['title'].
    """
    marker = f"{prefix}__"
    nested = {}
    for key in [k for k in row if k.startswith(marker)]:
        nested[key[len(marker):]] = row.pop(key)
    row[prefix] = nested or None
    return row


async def connect_db():
    """Connect to database on startup"""
    await database.connect()
    logger.info("Database connected")


async def disconnect_db():
    """Disconnect from database on shutdown"""
    await database.disconnect()
    logger.info("Database disconnected")
