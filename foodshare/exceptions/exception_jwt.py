"""Exception handlers for JWT errors."""
# pylint: disable=too-few-public-methods


class JWTError( Exception ):
    """Base class for some custom exceptions for bearer token errors."""


class JWTUnauthenticatedError( JWTError ):
    """Exception to handle case where the JWT is not in the request."""

    def __init__( self ):
        super().__init__()
        self.message = 'Authentication required'


class JWTInvalidTokenError( JWTError ):
    """Exception to handle a JWT with a bad signature, a bad format or an expired lifetime."""

    def __init__( self ):
        super().__init__()
        self.message = 'Invalid or expired token'
