"""The logging configuration for the application."""


def get_logging_configuration( wsgi_level, gunicorn_level, gunicorn=False, sql_level='WARNING' ):
    """"Return a dictionary to build the logging configuration.

    The SQL the relational backend sends is logged by sqlalchemy.engine: INFO shows the statements and DEBUG the
    result rows as well.

    :param str wsgi_level: The level of the root logger, used by the controllers and backends.
    :param str gunicorn_level: The level of gunicorn.error when served by gunicorn.
    :param bool gunicorn: Also write to errors.log through the gunicorn.error handler.
    :param str sql_level: The level of sqlalchemy.engine.
    :return: The dictConfig dictionary.
    """

    logging_configuration = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'default': { 'format': '%(levelname)-5s [%(filename)s:%(funcName)s:%(lineno)d] %(message)s' },
            'sql': { 'format': '%(levelname)-5s [sql] %(message)s' }
        },
        'handlers': {
            'wsgi': { 'class': 'logging.StreamHandler', 'stream': 'ext://sys.stdout', 'formatter': 'default' },
            'sql': { 'class': 'logging.StreamHandler', 'stream': 'ext://sys.stdout', 'formatter': 'sql' }
        },
        'loggers': {
            'wsgi': { 'level': wsgi_level, 'propagate': False, 'handlers': [ 'wsgi' ] },
            'sqlalchemy.engine': { 'level': sql_level, 'propagate': False, 'handlers': [ 'sql' ] }
        },
        'root': {
            'level': wsgi_level,
            'handlers': [ 'wsgi' ]
        }
    }
    if gunicorn:
        logging_configuration[ 'handlers' ][ 'gunicorn.error' ] = {
            'class': 'logging.FileHandler', 'filename': 'errors.log', 'formatter': 'default', 'delay': True
        }
        logging_configuration[ 'loggers' ][ 'gunicorn.error' ] = {
            'level': gunicorn_level, 'propagate': False, 'handlers': [ 'gunicorn.error' ]
        }
        logging_configuration[ 'root' ][ 'handlers' ].append( 'gunicorn.error' )
        logging_configuration[ 'loggers' ][ 'sqlalchemy.engine' ][ 'handlers' ].append( 'gunicorn.error' )

    return logging_configuration
