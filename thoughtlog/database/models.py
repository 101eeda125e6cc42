"""
Database Models - SQLAlchemy ORM models for the record store.

Tables:
- entries     : logged thoughts with their AI categorization
- categories  : per-user categories, unique on (user_id, name)
- insights    : persisted (legacy) insights, append-only
- api_tokens  : SHA-256 digests of bearer tokens mapped to user ids
"""
import uuid
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import declarative_base

from thoughtlog.core.constants import DEFAULT_CATEGORY_COLOR

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class RecordMixin:
    """Shared row-to-dict conversion; datetimes stay as datetime objects."""

    def to_dict(self) -> Dict[str, Any]:
        return {column.name: getattr(self, column.name) for column in self.__table__.columns}


class Category(RecordMixin, Base):
    """A user's category. Names are case-sensitive keys within a user's scope."""
    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_categories_user_name"),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(64), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(7), nullable=False, default=DEFAULT_CATEGORY_COLOR)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Entry(RecordMixin, Base):
    """A logged thought. Only category_id and ai_reasoning are set by the AI."""
    __tablename__ = "entries"
    __table_args__ = (
        Index("ix_entries_user_created", "user_id", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(64), nullable=False)
    original_input = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    ai_reasoning = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Insight(RecordMixin, Base):
    """
    A persisted insight.

    category_id has no foreign key: model output is stored verbatim.
    """
    __tablename__ = "insights"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(64), nullable=False, index=True)
    category_id = Column(Text, nullable=True)
    insight_text = Column(Text, nullable=False)
    action_plan = Column(Text, nullable=True)
    generated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class ApiToken(RecordMixin, Base):
    """Bearer token digest owned by a user."""
    __tablename__ = "api_tokens"

    token_hash = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
