"""
Flask development server entry point.
"""
import os
import sys
import logging
from pressure_tracker import create_app, init_database
from pressure_tracker.errors import StartupError

logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO').upper(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger('pressure_tracker')

app = create_app()

if __name__ == '__main__':
    host = os.getenv('HOST', '0.0.0.0')
    port = int(os.getenv('PORT', 8080))
    debug = os.getenv('FLASK_ENV') != 'production'

    try:
        init_database(app)
    except StartupError:
        logger.exception('Failed to start server')
        sys.exit(1)

    logger.info('API listening on http://localhost:%s%s', port, app.config['API_PREFIX'])
    app.run(
        host=host,
        port=port,
        debug=debug,
    )
