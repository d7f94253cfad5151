"""
Input validation for blood pressure measurements.
"""
import math
from decimal import Decimal, ROUND_HALF_UP
from datetime import datetime, timezone
from pressure_tracker.utils.dates import parse_instant

# Inclusive bounds, mirrored by the CHECK constraints on the measurements table
FIELD_RANGES = {
    'systolic': (40, 260),
    'diastolic': (20, 200),
    'pulse': (20, 250),
}


def _to_number(value):
    """Return value as a finite float, or None when it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        # Integers too large for a float are not finite numbers either
        return None
    return number if math.isfinite(number) else None


def _validate_number(field, raw, errors, fields):
    low, high = FIELD_RANGES[field]
    number = _to_number(raw)
    if number is None:
        errors.append(f'{field} must be a number')
    elif number < low or number > high:
        errors.append(f'{field} must be between {low} and {high}')
    else:
        # Half away from zero, like a SMALLINT cast
        fields[field] = int(Decimal(number).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def validate_measurement(data: dict, partial: bool = False):
    """Validate measurement input.

    In full mode (create) systolic and diastolic are required and a missing
    measuredAt defaults to now. In partial mode (update) only the keys present
    in ``data`` are checked, and absent keys are left out of the result so the
    stored values stay untouched. A present but null/empty pulse becomes None,
    which clears the stored pulse.

    Returns:
        (errors, fields): list of error strings (empty = valid) and the
        normalized column values ready for the store.
    """
    errors = []
    fields = {}

    for field in ('systolic', 'diastolic'):
        if not partial or field in data:
            _validate_number(field, data.get(field), errors, fields)

    if 'pulse' in data:
        pulse = data['pulse']
        if pulse is None or pulse == '':
            fields['pulse'] = None
        else:
            _validate_number('pulse', pulse, errors, fields)

    if 'measuredAt' in data:
        measured_at = parse_instant(data['measuredAt'])
        if measured_at is None:
            errors.append('measuredAt must be a valid date')
        else:
            fields['measured_at'] = measured_at
    elif not partial:
        fields['measured_at'] = datetime.now(timezone.utc)

    return errors, fields
