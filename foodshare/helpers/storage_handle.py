"""Select the storage backends once, at startup.

The controllers never reach for a global connection pool or file path: create_app() builds a StorageHandle and places
it on app.extensions, and the resources hand its backends to the controllers.

    storage_handle.primary    The backend chosen by STORAGE_BACKEND: relational, file or auto.
    storage_handle.flat_file  The file backend, used by /api/donate and as the registration failover.
"""
import logging
import os
import tempfile

from flask import current_app

from foodshare.exceptions.exception_storage import StorageConfigurationError
from foodshare.helpers.file_backend import FileBackend
from foodshare.helpers.relational_backend import RelationalBackend

STORAGE_EXTENSION_KEY = 'foodshare_storage'
BACKEND_RELATIONAL = 'relational'
BACKEND_FILE = 'file'
BACKEND_AUTO = 'auto'
EMPTY_DATA_DIRECTORY_NAME = 'foodshare_data'


class StorageHandle:
    """The backends the application was started with."""

    def __init__( self, primary, flat_file ):
        self.primary = primary
        self.flat_file = flat_file

    @property
    def failover( self ):
        """The backend to retry a registration against, or None when the primary already is the file backend."""

        if self.primary is self.flat_file:
            return None
        return self.flat_file


def build_storage_handle( app ):
    """Build the StorageHandle from app.config[ 'STORAGE_BACKEND' ].

    With auto the database is checked once and the file backend is used when it cannot be reached.

    :param app: The Flask application, after database.init_app().
    :return: StorageHandle
    """

    file_backend = FileBackend( resolve_data_directory( app.config.get( 'DATA_DIRECTORY', '' ) ) )
    backend_choice = str( app.config.get( 'STORAGE_BACKEND', BACKEND_AUTO ) ).lower()

    if backend_choice == BACKEND_FILE:
        return StorageHandle( file_backend, file_backend )
    if backend_choice not in ( BACKEND_RELATIONAL, BACKEND_AUTO ):
        raise StorageConfigurationError( backend_choice )

    relational_backend = RelationalBackend()
    if backend_choice == BACKEND_AUTO:
        with app.app_context():
            if not relational_backend.is_available():
                logging.warning(
                    'Database is unreachable: using the file backend in %s.', file_backend.data_directory
                )
                return StorageHandle( file_backend, file_backend )
    return StorageHandle( relational_backend, file_backend )


def resolve_data_directory( data_directory ):
    """Relative directories are taken from the project root.

    An empty value points at foodshare_data in the system temporary directory. Nothing is created there until the
    file backend first writes.
    """

    if not data_directory:
        return os.path.join( tempfile.gettempdir(), EMPTY_DATA_DIRECTORY_NAME )
    if os.path.isabs( data_directory ):
        return data_directory
    return os.path.abspath( os.path.join( os.path.dirname( __file__ ), '..', '..', data_directory ) )


def get_storage_handle():
    """The StorageHandle of the running application."""

    return current_app.extensions[ STORAGE_EXTENSION_KEY ]
