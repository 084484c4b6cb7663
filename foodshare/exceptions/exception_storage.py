"""Exception handlers for the storage backends."""
# pylint: disable=too-few-public-methods


class StorageError( Exception ):
    """Base class for some custom exceptions for the storage backends."""

    def __init__( self, message ):
        super().__init__( message )
        self.message = message


class StorageUnavailableError( StorageError ):
    """Exception to handle a backend that cannot be reached, e.g. refused connection or access denied."""

    def __init__( self, backend_name ):
        super().__init__( 'Storage backend {} is unavailable.'.format( backend_name ) )
        self.backend_name = backend_name


class StorageWriteError( StorageError ):
    """Exception to handle a backend that was reached but failed to read or persist a record."""

    def __init__( self, backend_name, detail='' ):
        message = 'Storage backend {} failed to persist the record.'.format( backend_name )
        if detail:
            message = '{} {}'.format( message, detail )
        super().__init__( message )
        self.backend_name = backend_name


class StorageConfigurationError( StorageError ):
    """Exception to handle an unknown STORAGE_BACKEND configuration value."""

    def __init__( self, backend_name ):
        super().__init__( 'Unknown storage backend: {}.'.format( backend_name ) )
