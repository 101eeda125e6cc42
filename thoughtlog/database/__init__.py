"""
Database module - keyed record store.

This module handles:
- Database connection management
- ORM models for entries, categories, insights and API tokens
- The RecordStore contract used by services
- Schema initialization and token issuing
"""
from thoughtlog.database.connection import DatabaseConnection, get_database, reset_database
from thoughtlog.database.models import ApiToken, Base, Category, Entry, Insight
from thoughtlog.database.store import (
    API_TOKENS,
    CATEGORIES,
    ENTRIES,
    INSIGHTS,
    RecordStore,
    SQLRecordStore,
)
from thoughtlog.database.init_db import drop_tables, hash_token, init_tables, issue_api_token

__all__ = [
    # Connection
    "DatabaseConnection",
    "get_database",
    "reset_database",
    # Models
    "Base",
    "Entry",
    "Category",
    "Insight",
    "ApiToken",
    # Store
    "RecordStore",
    "SQLRecordStore",
    "ENTRIES",
    "CATEGORIES",
    "INSIGHTS",
    "API_TOKENS",
    # Init
    "init_tables",
    "drop_tables",
    "hash_token",
    "issue_api_token",
]
