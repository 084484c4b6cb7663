"""WSGI entry point, e.g. gunicorn foodshare.wsgi:foodshare_app"""
import logging

from foodshare.app import create_app

foodshare_app = create_app()  # pylint: disable=invalid-name

gunicorn_logger = logging.getLogger( 'gunicorn.error' )  # pylint: disable=invalid-name
if gunicorn_logger.handlers:
    foodshare_app.logger.handlers = gunicorn_logger.handlers
    foodshare_app.logger.setLevel( gunicorn_logger.level )
