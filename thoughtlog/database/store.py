"""
Record Store - generic keyed record access.

The orchestration layer only needs four operations on named tables:
find, insert, update and delete. Rows travel as plain dicts so services
never touch ORM sessions.

SQLRecordStore implements the contract on top of the SQLAlchemy models.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from thoughtlog.core.exceptions import DuplicateRecordError, StoreError
from thoughtlog.core.logging_config import LoggerMixin
from thoughtlog.database.connection import DatabaseConnection, get_database
from thoughtlog.database.models import ApiToken, Category, Entry, Insight

ENTRIES = "entries"
CATEGORIES = "categories"
INSIGHTS = "insights"
API_TOKENS = "api_tokens"

Row = Dict[str, Any]


class RecordStore(ABC):
    """Abstract keyed record store."""

    @abstractmethod
    def find(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Row]:
        """Return rows whose columns equal every filter value."""

    @abstractmethod
    def insert(self, table: str, values: Dict[str, Any]) -> Row:
        """Insert one row and return it with generated fields filled in."""

    @abstractmethod
    def update(self, table: str, filters: Dict[str, Any], values: Dict[str, Any]) -> List[Row]:
        """Update matching rows and return them after the change."""

    @abstractmethod
    def delete(self, table: str, filters: Dict[str, Any]) -> int:
        """Delete matching rows and return how many were removed."""

    def find_one(self, table: str, filters: Dict[str, Any]) -> Optional[Row]:
        rows = self.find(table, filters, limit=1)
        return rows[0] if rows else None


class SQLRecordStore(RecordStore, LoggerMixin):
    """
    RecordStore backed by SQLAlchemy.

    Example:
        >>> store = SQLRecordStore(DatabaseConnection("sqlite://"))
        >>> row = store.insert("categories", {"user_id": "u1", "name": "Gym"})
        >>> store.find("categories", {"user_id": "u1"})[0]["id"] == row["id"]
        True
    """

    _MODELS = {
        ENTRIES: Entry,
        CATEGORIES: Category,
        INSIGHTS: Insight,
        API_TOKENS: ApiToken,
    }

    def __init__(self, db: Optional[DatabaseConnection] = None):
        self.db = db or get_database()

    def find(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Row]:
        model = self._model(table)
        try:
            with self.db.get_session() as session:
                query = self._filtered(session.query(model), model, filters or {})
                if order_by:
                    column = self._column(model, order_by)
                    query = query.order_by(column.desc() if descending else column.asc())
                if limit is not None:
                    query = query.limit(limit)
                return [row.to_dict() for row in query.all()]
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read {table}: {e}") from e

    def insert(self, table: str, values: Dict[str, Any]) -> Row:
        model = self._model(table)
        for key in values:
            self._column(model, key)
        try:
            with self.db.get_session() as session:
                record = model(**values)
                session.add(record)
                session.flush()
                row = record.to_dict()
        except IntegrityError as e:
            self.logger.warning(f"Integrity violation inserting into {table}: {e.orig}")
            raise DuplicateRecordError(table) from e
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to insert into {table}: {e}") from e

        self.logger.debug(f"Inserted into {table}: id={row.get('id')}")
        return row

    def update(self, table: str, filters: Dict[str, Any], values: Dict[str, Any]) -> List[Row]:
        if not filters:
            raise ValueError("update() requires at least one filter")
        model = self._model(table)
        try:
            with self.db.get_session() as session:
                records = self._filtered(session.query(model), model, filters).all()
                for record in records:
                    for key, value in values.items():
                        self._column(model, key)
                        setattr(record, key, value)
                session.flush()
                return [record.to_dict() for record in records]
        except IntegrityError as e:
            raise DuplicateRecordError(table) from e
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to update {table}: {e}") from e

    def delete(self, table: str, filters: Dict[str, Any]) -> int:
        if not filters:
            raise ValueError("delete() requires at least one filter")
        model = self._model(table)
        try:
            with self.db.get_session() as session:
                deleted = self._filtered(session.query(model), model, filters).delete(
                    synchronize_session=False
                )
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to delete from {table}: {e}") from e

        self.logger.debug(f"Deleted {deleted} row(s) from {table}")
        return deleted

    def _model(self, table: str):
        try:
            return self._MODELS[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table}") from None

    @staticmethod
    def _column(model, name: str):
        if name not in model.__table__.columns:
            raise ValueError(f"Unknown column {model.__tablename__}.{name}")
        return getattr(model, name)

    def _filtered(self, query, model, filters: Dict[str, Any]):
        for key, value in filters.items():
            column = self._column(model, key)
            query = query.filter(column.is_(None) if value is None else column == value)
        return query
