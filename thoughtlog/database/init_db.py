"""
Database Initialization - create tables and issue API tokens.

Run directly to create the schema, optionally minting a token for a user:

    python -m thoughtlog.database.init_db            # create tables
    python -m thoughtlog.database.init_db USER_ID    # create tables + print a token
"""
import hashlib
import secrets
import sys
from typing import Optional

from thoughtlog.core.logging_config import get_logger
from thoughtlog.database.connection import DatabaseConnection, get_database
from thoughtlog.database.models import Base
from thoughtlog.database.store import API_TOKENS, RecordStore, SQLRecordStore

logger = get_logger(__name__)


def init_tables(db: Optional[DatabaseConnection] = None) -> bool:
    """
    Create all tables if they don't exist.

    Returns:
        True if tables were created successfully
    """
    db = db or get_database()
    try:
        Base.metadata.create_all(db.engine)
        logger.info("Thoughtlog tables initialized successfully")
        return True
    except Exception as e:
        logger.error(f"Failed to initialize tables: {e}")
        raise


def drop_tables(db: Optional[DatabaseConnection] = None) -> bool:
    """Drop all tables (use with caution!)."""
    db = db or get_database()
    Base.metadata.drop_all(db.engine)
    logger.warning("Thoughtlog tables dropped")
    return True


def hash_token(token: str) -> str:
    """Digest stored in api_tokens; raw tokens are never persisted."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def issue_api_token(user_id: str, store: Optional[RecordStore] = None) -> str:
    """
    Mint a bearer token for a user.

    Returns:
        The raw token; only its digest is stored
    """
    store = store or SQLRecordStore()
    token = secrets.token_urlsafe(32)
    store.insert(API_TOKENS, {"token_hash": hash_token(token), "user_id": user_id})
    logger.info(f"Issued API token for user {user_id}")
    return token


if __name__ == "__main__":
    print("Initializing tables...")
    init_tables()
    if len(sys.argv) > 1:
        print(f"Token for {sys.argv[1]}: {issue_api_token(sys.argv[1])}")
    print("Done!")
