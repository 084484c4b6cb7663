"""The main application module with create_app(), resources and error handlers."""
import importlib
import logging
from datetime import timedelta
from logging.config import dictConfig
import os
import sys

from flask import Flask
from flask import jsonify
from flask_api import status
from flask_restful import Api
from marshmallow.exceptions import ValidationError as MarshmallowValidationError
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError

from foodshare.logging_configuration import get_logging_configuration
from foodshare.exceptions.exception_jwt import JWTInvalidTokenError
from foodshare.exceptions.exception_jwt import JWTUnauthenticatedError
from foodshare.exceptions.exception_storage import StorageError
from foodshare.exceptions.exception_user import UserDuplicateEmailError
from foodshare.exceptions.exception_user import UserInvalidCredentialsError
from foodshare.flask_essentials import database
from foodshare.flask_essentials import jwt
from foodshare.flask_essentials import marshmallow
from foodshare.helpers.storage_handle import STORAGE_EXTENSION_KEY
from foodshare.helpers.storage_handle import build_storage_handle
from foodshare.resources.app_health import Heartbeat
from foodshare.resources.auth import Login
from foodshare.resources.auth import Register
from foodshare.resources.donation import BusinessDonation
from foodshare.resources.donation import Donation
from foodshare.resources.donation import FinancialDonation
from foodshare.resources.donation import IndividualDonation
# pylint: disable=too-many-locals
# pylint: disable=too-many-statements


def create_app( app_config_env=None, storage_handle=None ):
    """Application factory.

    Allows the application to be instantiated with a specific configuration, e.g. configurations for development,
    testing, and production. Implements a configuration loader to augment the Flask app.config() in loading these
    configurations. Supports YAML and tagged environment variables. Manages the application logging level.

    The storage backends are selected here, once. Tests may pass their own StorageHandle instead.

    :param str app_config_env: The configuration name to use in loading the configuration variables.
    :param storage_handle: Optional StorageHandle overriding the configured STORAGE_BACKEND.
    :return: The Flask application.
    """

    # Set the ENV variable in the Dockerfile. If we can't find a value set the app_config_env to DEFAULT.
    if not app_config_env:
        if 'APP_ENV' in os.environ:
            app_config_env = os.environ[ 'APP_ENV' ]
        else:
            app_config_env = 'DEFAULT'

    app = Flask( 'foodshare_api' )

    conf_root = os.path.join( os.path.dirname( __file__ ), '..', 'configuration' )
    configuration_module = importlib.import_module( '.config_loader', package='configuration' )
    configuration = configuration_module.ConfigLoader()
    configuration.update_from_yaml_file( os.path.join( conf_root, 'conf.yml' ), app_config_env )
    configuration.update_from_env_variables( app_config_env )

    app.config.update( configuration )
    app.config.update( { 'ENV': app_config_env } )
    app.config.update( build_database_configuration( app.config ) )
    app.config.update( {
        'JWT_SECRET_KEY': app.config[ 'JWT_SECRET' ],
        'JWT_ACCESS_TOKEN_EXPIRES': timedelta( hours=app.config[ 'JWT_EXPIRES_HOURS' ] ),
        'JWT_TOKEN_LOCATION': [ 'headers' ]
    } )

    wsgi_log_level = 'WARNING'
    gunicorn_log_level = 'WARNING'
    # Set the level of the root logger.
    if 'WSGI_LOG_LEVEL' in app.config and app.config[ 'WSGI_LOG_LEVEL' ] != '':
        wsgi_log_level = app.config[ 'WSGI_LOG_LEVEL' ]
    if 'GUNICORN_LOG_LEVEL' in app.config and app.config[ 'GUNICORN_LOG_LEVEL' ] != '':
        gunicorn_log_level = app.config[ 'GUNICORN_LOG_LEVEL' ]
    sql_log_level = app.config.get( 'SQL_LOG_LEVEL' ) or 'WARNING'

    # If running under gunicorn add gunicorn.error to handlers.
    gunicorn = 'gunicorn' in sys.modules

    dictConfig( get_logging_configuration( wsgi_log_level, gunicorn_log_level, gunicorn, sql_log_level ) )
    logging.root.log( logging.root.level, '***** Logging is enabled for this level.' )
    logging.root.log( logging.root.level, '***** app.config[ ENV ]            : %s', app_config_env )
    logging.root.log( logging.root.level, '***** app.config[ DB_NAME ]        : %s', app.config[ 'DB_NAME' ] )
    logging.root.log( logging.root.level, '***** app.config[ STORAGE_BACKEND ]: %s', app.config[ 'STORAGE_BACKEND' ] )

    database.init_app( app )
    marshmallow.init_app( app )
    jwt.init_app( app )
    # Absolutely needed for JWT errors to work correctly in production
    app.config.update( PROPAGATE_EXCEPTIONS=True )

    if storage_handle is None:
        storage_handle = build_storage_handle( app )
    app.extensions[ STORAGE_EXTENSION_KEY ] = storage_handle
    logging.info( '***** Storage backend in use: %s', storage_handle.primary.name )

    api = Api( app )

    api.add_resource( Register, '/api/register' )
    api.add_resource( Login, '/api/login' )
    api.add_resource( BusinessDonation, '/api/business-donation' )
    api.add_resource( IndividualDonation, '/api/individual-donation' )
    api.add_resource( FinancialDonation, '/api/financial-donation' )
    api.add_resource( Donation, '/api/donate' )
    api.add_resource( Heartbeat, '/api/heartbeat' )

    @app.after_request
    def after_request( response ):  # pylint: disable=unused-variable
        """A handler for defining response headers.

        :param response: an HTTP response object
        :return:
        """

        response.headers.add( 'Access-Control-Allow-Origin', '*' )
        response.headers.add( 'Access-Control-Allow-Headers', 'Content-Type, Authorization' )
        response.headers.add( 'Access-Control-Allow-Methods', 'GET, POST, OPTIONS' )
        return response

    @jwt.unauthorized_loader
    def handle_missing_token( reason ):  # pylint: disable=unused-variable
        """No bearer token in the request: HTTP status 401."""

        logging.debug( 'Bearer token missing: %s', reason )
        return error_response( JWTUnauthenticatedError().message, status.HTTP_401_UNAUTHORIZED )

    @jwt.invalid_token_loader
    def handle_invalid_token( reason ):  # pylint: disable=unused-variable
        """A bearer token with a bad signature or format: HTTP status 403."""

        logging.debug( 'Bearer token invalid: %s', reason )
        return error_response( JWTInvalidTokenError().message, status.HTTP_403_FORBIDDEN )

    @jwt.expired_token_loader
    def handle_expired_token( jwt_header, jwt_payload ):  # pylint: disable=unused-variable, unused-argument
        """A bearer token past its lifetime: HTTP status 403."""

        return error_response( JWTInvalidTokenError().message, status.HTTP_403_FORBIDDEN )

    @app.errorhandler( UserDuplicateEmailError )
    @app.errorhandler( MarshmallowValidationError )
    def handle_400( error ):  # pylint: disable=unused-variable
        """HTTP status 400 ( bad request ) error handler.

         :param error: Error message raised by exception.
         :return:
         """

        return error_response( handle_error_message( error ), status.HTTP_400_BAD_REQUEST )

    @app.errorhandler( UserInvalidCredentialsError )
    @app.errorhandler( JWTUnauthenticatedError )
    def handle_401( error ):  # pylint: disable=unused-variable
        """HTTP status 401 ( unauthorized ) error handler.

         :param error: Error message raised by exception.
         :return:
         """

        return error_response( handle_error_message( error ), status.HTTP_401_UNAUTHORIZED )

    @app.errorhandler( JWTInvalidTokenError )
    def handle_403( error ):  # pylint: disable=unused-variable
        """HTTP status 403 ( forbidden ) error handler.

         :param error: Error message raised by exception.
         :return:
         """

        return error_response( handle_error_message( error ), status.HTTP_403_FORBIDDEN )

    @app.errorhandler( StorageError )
    @app.errorhandler( SQLAlchemyError )
    def handle_500( error ):  # pylint: disable=unused-variable
        """HTTP status 500 ( internal server error ) error handler.

        The storage detail is logged and a generic message returned.

        :param error: Error message raised by exception.
        :return:
        """

        handle_error_message( error )
        return error_response( 'Server error', status.HTTP_500_INTERNAL_SERVER_ERROR )

    def handle_error_message( error ):
        """Used by error handlers for handling error and error.message.

        :param error: The error raised by the exception.
        :return: return the error message.
        """

        if isinstance( error, MarshmallowValidationError ):
            logging.info( 'Payload validation failed: %s', error.messages )
            return format_validation_messages( error.messages )
        if hasattr( error, 'message' ):
            if isinstance( error, ( StorageError, SQLAlchemyError ) ):
                logging.exception( error.message )
            else:
                logging.info( error.message )
            return error.message
        logging.exception( error )
        return str( error )

    return app


def error_response( message, status_code ):
    """The JSON body shared by every error response."""

    response = jsonify( { 'success': False, 'message': message } )
    response.status_code = status_code
    return response


def format_validation_messages( messages ):
    """Flatten Marshmallow's { field: [ errors ] } into one readable sentence."""

    if not isinstance( messages, dict ):
        return str( messages )
    parts = []
    for field_name in sorted( messages ):
        errors = messages[ field_name ]
        if isinstance( errors, list ):
            errors = ' '.join( str( error ) for error in errors )
        parts.append( '{}: {}'.format( field_name, errors ) )
    return '; '.join( parts )


def build_database_configuration( config ):
    """Build SQLALCHEMY_DATABASE_URI from the DB_* keys when it is not given, and the connection pool options.

    :param config: The loaded configuration.
    :return: The Flask-SQLAlchemy configuration keys.
    """

    database_uri = config.get( 'SQLALCHEMY_DATABASE_URI' )
    if not database_uri:
        database_uri = URL.create(
            'mysql+pymysql',
            username=config[ 'DB_USER' ],
            password=config[ 'DB_PASSWORD' ] or None,
            host=config[ 'DB_HOST' ],
            database=config[ 'DB_NAME' ]
        ).render_as_string( hide_password=False )

    database_configuration = { 'SQLALCHEMY_DATABASE_URI': database_uri }
    if not database_uri.startswith( 'sqlite' ):
        database_configuration[ 'SQLALCHEMY_ENGINE_OPTIONS' ] = {
            'pool_size': config[ 'DB_POOL_SIZE' ],
            'pool_pre_ping': True
        }
    return database_configuration


if __name__ == '__main__':
    foodshare_app = create_app()  # pylint: disable=invalid-name
    foodshare_app.run( host='127.0.0.1', port=foodshare_app.config[ 'PORT' ], debug=True )
