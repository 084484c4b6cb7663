"""Exception handlers for the user registration and login endpoints."""
# pylint: disable=too-few-public-methods


class UserError( Exception ):
    """Base class for some custom exceptions for the user endpoints."""


class UserDuplicateEmailError( UserError ):
    """Exception to handle a registration for an email that already exists in the active backend."""

    def __init__( self ):
        super().__init__()
        self.message = 'Email already registered'


class UserInvalidCredentialsError( UserError ):
    """Exception to handle an unknown email or a password that does not match."""

    def __init__( self ):
        super().__init__()
        self.message = 'Invalid credentials'
