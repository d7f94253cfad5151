"""
Blood pressure measurement model.
"""
from datetime import datetime, timezone
from sqlalchemy.orm import validates
from pressure_tracker import db
from pressure_tracker.utils.classification import classify_pressure
from pressure_tracker.utils.dates import isoformat_utc
from pressure_tracker.utils.validators import FIELD_RANGES


def _utcnow():
    return datetime.now(timezone.utc)


def _range_check(field, nullable=False):
    low, high = FIELD_RANGES[field]
    condition = f'{field} BETWEEN {low} AND {high}'
    if nullable:
        condition = f'{field} IS NULL OR {condition}'
    return db.CheckConstraint(condition, name=f'ck_measurements_{field}_range')


class Measurement(db.Model):
    """
    A single blood pressure measurement.
    The status tier is derived from systolic/diastolic on serialization and
    is never stored.
    """
    __tablename__ = 'measurements'
    __table_args__ = (
        _range_check('systolic'),
        _range_check('diastolic'),
        _range_check('pulse', nullable=True),
        # Ids are never reused after a delete
        {'sqlite_autoincrement': True},
    )

    id = db.Column(db.Integer, primary_key=True)

    systolic = db.Column(db.SmallInteger, nullable=False)
    diastolic = db.Column(db.SmallInteger, nullable=False)
    pulse = db.Column(db.SmallInteger, nullable=True)

    # Timestamps
    measured_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow,
                           onupdate=_utcnow)

    @validates('systolic', 'diastolic', 'pulse')
    def _check_range(self, key, value):
        if value is None and key == 'pulse':
            return value
        low, high = FIELD_RANGES[key]
        if value is None or not low <= value <= high:
            raise ValueError(f'{key} must be between {low} and {high}, got {value!r}')
        return value

    def to_dict(self):
        return serialize_measurement(self)

    def __repr__(self):
        return f'<Measurement {self.id}: {self.systolic}/{self.diastolic}>'


db.Index('idx_measurements_measured_at', Measurement.measured_at.desc())


def serialize_measurement(measurement):
    """Public JSON shape of a measurement; status is computed here."""
    return {
        'id': measurement.id,
        'systolic': measurement.systolic,
        'diastolic': measurement.diastolic,
        'pulse': measurement.pulse,
        'measuredAt': isoformat_utc(measurement.measured_at),
        'status': classify_pressure(measurement.systolic, measurement.diastolic),
    }
