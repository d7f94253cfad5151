"""
Audit logging for measurement changes.
Every create, update and delete is written as a JSON event.
"""
import os
import logging
import structlog
from datetime import datetime, timezone
from flask import request, has_request_context


def setup_audit_logging(app):
    """Configure structured audit logging."""

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    audit_logger = logging.getLogger('audit')
    audit_logger.setLevel(logging.INFO)

    # File handler for audit logs; an empty path keeps events on the root handlers
    log_file = app.config.get('AUDIT_LOG_FILE')
    if log_file:
        log_file = os.path.abspath(log_file)
        known = {getattr(h, 'baseFilename', None) for h in audit_logger.handlers}
        if log_file not in known:
            os.makedirs(os.path.dirname(log_file), exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.INFO)
            file_handler.setFormatter(logging.Formatter('%(message)s'))
            audit_logger.addHandler(file_handler)

    app.config['AUDIT_LOGGER'] = structlog.get_logger('audit')


def get_audit_logger():
    """Get the audit logger instance."""
    from flask import current_app
    return current_app.config.get('AUDIT_LOGGER', structlog.get_logger('audit'))


def audit_log(action: str, resource_type: str, resource_id: str = None,
              details: dict = None):
    """
    Log an audit event.

    Args:
        action: The action performed (CREATE, UPDATE, DELETE, EXPORT)
        resource_type: Type of resource touched (measurement, measurements_csv)
        resource_id: ID of the specific resource (optional)
        details: Additional details about the action (optional)
    """
    logger = get_audit_logger()

    if has_request_context():
        client_ip = request.remote_addr
        user_agent = request.headers.get('User-Agent', 'unknown')
    else:
        client_ip = 'unknown'
        user_agent = 'unknown'

    log_entry = {
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'action': action,
        'resource_type': resource_type,
        'resource_id': resource_id,
        'client_ip': client_ip,
        'user_agent': user_agent,
        'details': details or {}
    }

    logger.info("audit_event", **log_entry)
