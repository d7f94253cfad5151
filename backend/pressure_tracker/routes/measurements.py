"""
Measurement API routes.
"""
from datetime import datetime, timezone
from flask import Blueprint, Response, current_app, jsonify, request
from pressure_tracker.config import LIST_DEFAULT_LIMIT, LIST_MAX_LIMIT
from pressure_tracker.errors import EmptyUpdateError, ValidationError
from pressure_tracker.models import serialize_measurement
from pressure_tracker.utils.audit_logger import audit_log
from pressure_tracker.utils.export import generate_measurements_csv
from pressure_tracker.utils.stats import clamp_limit
from pressure_tracker.utils.validators import validate_measurement

measurements_bp = Blueprint('measurements', __name__)


def get_store():
    """The store injected into create_app."""
    return current_app.extensions['measurement_store']


def json_body():
    """Return the request JSON object; a missing body counts as empty."""
    data = request.get_json(silent=True)
    if data is None:
        if request.get_data():
            raise ValidationError('Request body must be valid JSON')
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


@measurements_bp.route('/measurements', methods=['GET'])
def list_measurements():
    """Return the most recent measurements."""
    limit = clamp_limit(request.args.get('limit'), LIST_DEFAULT_LIMIT, LIST_MAX_LIMIT)
    measurements = get_store().list(limit)
    return jsonify([serialize_measurement(m) for m in measurements]), 200


@measurements_bp.route('/measurements/export.csv', methods=['GET'])
def export_measurements():
    """Export the most recent measurements to CSV."""
    limit = clamp_limit(request.args.get('limit'), LIST_DEFAULT_LIMIT, LIST_MAX_LIMIT)
    measurements = get_store().list(limit)
    csv_output = generate_measurements_csv(measurements)

    audit_log('EXPORT', 'measurements_csv', details={'count': len(measurements)})

    return Response(
        csv_output.getvalue(),
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename=measurements_export_{datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")}.csv'}
    )


@measurements_bp.route('/measurements/<int:id>', methods=['GET'])
def get_measurement(id):
    return jsonify(serialize_measurement(get_store().get(id))), 200


@measurements_bp.route('/measurements', methods=['POST'])
def create_measurement():
    """Record a new measurement. measuredAt defaults to now."""
    errors, fields = validate_measurement(json_body())
    if errors:
        raise ValidationError(errors)

    measurement = get_store().insert(fields)

    audit_log('CREATE', 'measurement', resource_id=str(measurement.id))

    return jsonify(serialize_measurement(measurement)), 201


@measurements_bp.route('/measurements/<int:id>', methods=['PATCH'])
def update_measurement(id):
    """Replace only the supplied fields. A null pulse clears it."""
    errors, fields = validate_measurement(json_body(), partial=True)
    if errors:
        raise ValidationError(errors)
    if not fields:
        raise EmptyUpdateError()

    measurement = get_store().update(id, fields)

    audit_log('UPDATE', 'measurement', resource_id=str(id),
              details={'fields': sorted(fields)})

    return jsonify(serialize_measurement(measurement)), 200


@measurements_bp.route('/measurements/<int:id>', methods=['DELETE'])
def delete_measurement(id):
    get_store().delete(id)

    audit_log('DELETE', 'measurement', resource_id=str(id))

    return '', 204
