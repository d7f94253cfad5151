"""
CSV export of measurements.
"""
import csv
import io
from pressure_tracker.utils.classification import classify_pressure
from pressure_tracker.utils.dates import isoformat_utc


def generate_measurements_csv(measurements):
    """Generate CSV export of blood pressure measurements.

    Args:
        measurements: Iterable of Measurement model objects

    Returns:
        StringIO object containing CSV data
    """
    output = io.StringIO()

    fieldnames = ['id', 'measured_at', 'systolic', 'diastolic', 'pulse', 'status']

    writer = csv.DictWriter(output, fieldnames=fieldnames)
    writer.writeheader()

    for measurement in measurements:
        writer.writerow({
            'id': measurement.id,
            'measured_at': isoformat_utc(measurement.measured_at),
            'systolic': measurement.systolic,
            'diastolic': measurement.diastolic,
            'pulse': measurement.pulse if measurement.pulse is not None else '',
            'status': classify_pressure(measurement.systolic, measurement.diastolic),
        })

    output.seek(0)
    return output
