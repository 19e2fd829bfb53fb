"""Persistence gateway shared by every resource endpoint."""
import logging
from datetime import timedelta
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from .models import now

logger = logging.getLogger(__name__)

# Serialized timestamps carry millisecond precision
TIMESTAMP_RESOLUTION = timedelta(milliseconds=1)


class RecordNotFound(LookupError):
    """Raised when an identifier has no matching record."""

    def __init__(self, model, record_id):
        self.model = model
        self.record_id = record_id
        super().__init__(f"{model.__tablename__} record {record_id} does not exist")


def next_timestamp(previous):
    """Current time, but never earlier than one tick after ``previous``."""
    current = now()
    if previous is not None and current < previous + TIMESTAMP_RESOLUTION:
        return previous + TIMESTAMP_RESOLUTION
    return current


class PersistenceGateway:
    """Per-model primitives over the relational store.

    One instance is built by the application factory and handed to every
    blueprint. The gateway performs no business validation; store failures are
    rolled back, logged and re-raised to the caller.
    """

    def __init__(self, database):
        self.db = database

    @property
    def session(self):
        return self.db.session

    def find_many(self, model, order_by=(), criteria=()):
        """All rows of ``model`` matching ``criteria``, ordered by ``order_by``.

        Insertion order (ascending id) breaks ties.
        """
        stmt = select(model).where(*criteria).order_by(*order_by, model.id.asc())
        return self.session.scalars(stmt).unique().all()

    def find_by_id(self, model, record_id):
        return self.session.get(model, record_id)

    def get(self, model, record_id):
        record = self.find_by_id(model, record_id)
        if record is None:
            raise RecordNotFound(model, record_id)
        return record

    def count(self, model, *criteria):
        stmt = select(func.count()).select_from(model).where(*criteria)
        return self.session.scalar(stmt)

    def create(self, model, fields):
        record = model(**fields)
        self.session.add(record)
        self._commit(f"create {model.__tablename__} record")
        return record

    def update(self, model, record_id, fields):
        record = self.get(model, record_id)
        for key, value in fields.items():
            setattr(record, key, value)
        record.updated_at = next_timestamp(record.updated_at)
        self._commit(f"update {model.__tablename__} record {record_id}")
        return record

    def delete(self, model, record_id):
        record = self.get(model, record_id)
        self.session.delete(record)
        self._commit(f"delete {model.__tablename__} record {record_id}")

    def ping(self):
        """Round-trip a trivial query; raises if the store is unreachable."""
        self.session.execute(select(1))

    def _commit(self, operation):
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database error during {operation}: {e}")
            self.session.rollback()
            raise
