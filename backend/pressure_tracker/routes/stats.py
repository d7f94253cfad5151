"""Statistics routes."""
from flask import Blueprint, current_app, jsonify, request
from pressure_tracker.config import LIST_DEFAULT_LIMIT, LIST_MAX_LIMIT
from pressure_tracker.errors import ValidationError
from pressure_tracker.utils.dates import parse_instant
from pressure_tracker.utils.stats import clamp_limit, count_statuses, summarize
from .measurements import get_store

stats_bp = Blueprint('stats', __name__)


@stats_bp.route('/stats/summary', methods=['GET'])
def get_summary():
    """Per-day, week or month statistics, most recent bucket first."""
    since = request.args.get('since')
    if since:
        since = parse_instant(since)
        if since is None:
            raise ValidationError('since must be a valid date')
    else:
        since = None

    granularity, buckets = summarize(
        get_store(),
        granularity=request.args.get('range'),
        limit=request.args.get('limit'),
        tz=current_app.config['STATS_TZINFO'],
        since=since,
    )

    return jsonify({
        'range': granularity,
        'data': [b.to_dict() for b in buckets],
    }), 200


@stats_bp.route('/stats/status', methods=['GET'])
def get_status_distribution():
    """Status tier counts over the most recent measurements."""
    limit = clamp_limit(request.args.get('limit'), LIST_DEFAULT_LIMIT, LIST_MAX_LIMIT)
    measurements = get_store().list(limit)

    return jsonify({
        'total': len(measurements),
        'data': count_statuses(measurements),
    }), 200
