"""
Measurement persistence.

The store wraps a SQLAlchemy session and is handed to the application
factory, so tests can substitute any object with the same methods.
"""
import logging
from contextlib import contextmanager
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from pressure_tracker.config import LIST_DEFAULT_LIMIT, LIST_MAX_LIMIT
from pressure_tracker.errors import NotFoundError, StoreError
from pressure_tracker.models import Measurement
from pressure_tracker.utils.stats import clamp_limit

logger = logging.getLogger(__name__)

# Columns a client may write through insert/update
WRITABLE_FIELDS = ('systolic', 'diastolic', 'pulse', 'measured_at')


class MeasurementStore:
    """CRUD and aggregation reads over the measurements table.

    Every mutation is a single statement committed on its own. SQLAlchemy
    failures roll the session back and surface as StoreError.
    """

    def __init__(self, session):
        self.session = session

    @contextmanager
    def _guard(self, action, commit=False):
        try:
            yield
            if commit:
                self.session.commit()
        except (SQLAlchemyError, ValueError) as err:
            self.session.rollback()
            logger.error('Failed to %s measurement: %s', action, err)
            raise StoreError(f'Failed to {action} measurement: {err}') from err

    def insert(self, fields):
        values = {key: fields[key] for key in WRITABLE_FIELDS if key in fields}
        with self._guard('insert', commit=True):
            measurement = Measurement(**values)
            self.session.add(measurement)
        logger.debug('Inserted measurement %s', measurement.id)
        return measurement

    def get(self, id):
        with self._guard('read'):
            measurement = self.session.get(Measurement, id)
        if measurement is None:
            raise NotFoundError(id)
        return measurement

    def list(self, limit=None):
        """Most recent measured_at first, at most LIST_MAX_LIMIT rows."""
        limit = clamp_limit(limit, LIST_DEFAULT_LIMIT, LIST_MAX_LIMIT)
        with self._guard('list'):
            return (self.session.query(Measurement)
                    .order_by(Measurement.measured_at.desc(), Measurement.id.desc())
                    .limit(limit)
                    .all())

    def update(self, id, fields):
        """Replace only the supplied columns; updated_at is refreshed on flush."""
        measurement = self.get(id)
        with self._guard('update', commit=True):
            for key in WRITABLE_FIELDS:
                if key in fields:
                    setattr(measurement, key, fields[key])
        return measurement

    def delete(self, id):
        with self._guard('delete', commit=True):
            count = (self.session.query(Measurement)
                     .filter(Measurement.id == id)
                     .delete(synchronize_session=False))
        if not count:
            raise NotFoundError(id)

    def query_for_aggregation(self, since=None):
        """All measurements, or those measured at or after ``since``."""
        with self._guard('query'):
            query = self.session.query(Measurement)
            if since is not None:
                query = query.filter(Measurement.measured_at >= since)
            return query.order_by(Measurement.measured_at.desc()).all()

    def ping(self):
        """Connectivity check."""
        with self._guard('ping'):
            self.session.execute(text('SELECT 1'))
