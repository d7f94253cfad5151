"""
Application configuration loaded from environment variables.
"""
import os
from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv()

# Row limits for list and stats endpoints
LIST_DEFAULT_LIMIT = 100
LIST_MAX_LIMIT = 500
STATS_DEFAULT_LIMIT = 30
STATS_MAX_LIMIT = 180


def _database_url():
    """Return DATABASE_URL, or build a PostgreSQL URL from the DB_* variables."""
    database_url = os.getenv('DATABASE_URL')
    if database_url:
        return database_url

    url = URL.create(
        'postgresql',
        username=os.getenv('DB_USER', 'postgres'),
        password=os.getenv('DB_PASSWORD') or None,
        host=os.getenv('DB_HOST', 'localhost'),
        port=int(os.getenv('DB_PORT') or 5432),
        database=os.getenv('DB_NAME', 'pressure_tracker'),
    )
    return url.render_as_string(hide_password=False)


def parse_origins(raw):
    """Split a comma-separated origin list. Empty input means any origin."""
    if not raw:
        return []
    return [o.strip() for o in raw.split(',') if o.strip()]


def load_config():
    """Collect Flask config values from the environment."""
    database_url = _database_url()

    engine_options = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }
    if os.getenv('DB_SSL') == 'true' and database_url.startswith('postgresql'):
        engine_options['connect_args'] = {'sslmode': 'require'}

    return {
        'SQLALCHEMY_DATABASE_URI': database_url,
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'SQLALCHEMY_ENGINE_OPTIONS': engine_options,
        # Request size limit (1 MB)
        'MAX_CONTENT_LENGTH': 1 * 1024 * 1024,
        'CORS_ORIGINS': parse_origins(os.getenv('CORS_ORIGIN')),
        'API_PREFIX': os.getenv('API_PREFIX', '/api'),
        'STATS_TIMEZONE': os.getenv('STATS_TIMEZONE', 'UTC'),
        'LOG_LEVEL': os.getenv('LOG_LEVEL', 'INFO').upper(),
        'AUDIT_LOG_FILE': os.getenv('AUDIT_LOG_FILE', 'logs/audit.log'),
    }
