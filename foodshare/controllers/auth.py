"""Controllers for Flask-RESTful resources: handle the business logic for registration and login."""
import logging

from foodshare.exceptions.exception_storage import StorageUnavailableError
from foodshare.exceptions.exception_user import UserDuplicateEmailError
from foodshare.exceptions.exception_user import UserInvalidCredentialsError
from foodshare.helpers.passwords import check_password
from foodshare.helpers.passwords import hash_password
from foodshare.helpers.tokens import issue_token
from foodshare.schemas.user import LoginSchema
from foodshare.schemas.user import RegistrationSchema


def register_user( payload, storage_backend, failover_backend=None ):
    """Register a user in the active backend.

    payload = {
        "name": "Alice Baker",
        "email": "alice@example.com",
        "phone": "5551234567",
        "password": "secret",
        "userType": "donor"
    }

    If the relational backend cannot be reached, e.g. the connection is refused or the credentials are denied, the
    same registration is run against the failover backend and the caller still sees a success.

    :param dict payload: The registration request.
    :param storage_backend: The active StorageBackend.
    :param failover_backend: The StorageBackend to retry against, or None.
    :return: The response body.
    """

    registration = RegistrationSchema().load( payload or {} )
    logging.info( 'Registration request for %s as %s.', registration[ 'email' ], registration[ 'user_type' ] )

    try:
        user = create_user( registration, storage_backend )
    except StorageUnavailableError as error:
        if not failover_backend:
            raise
        logging.warning( '%s Registering with the %s backend.', error.message, failover_backend.name )
        user = create_user( registration, failover_backend )

    logging.info( 'User registered with id: %s', user[ 'user_id' ] )
    return { 'success': True, 'message': 'Registration successful' }


def create_user( registration, storage_backend ):
    """Hash the password and add the user, unless the email is already registered in the backend.

    :param dict registration: Deserialized by RegistrationSchema.
    :param storage_backend: The StorageBackend to write to.
    :return: The stored user dictionary.
    """

    if storage_backend.find_user_by_email( registration[ 'email' ] ):
        raise UserDuplicateEmailError

    user = {
        'user_type': registration[ 'user_type' ],
        'name': registration[ 'name' ],
        'email': registration[ 'email' ],
        'phone': registration[ 'phone' ],
        'password_hash': hash_password( registration[ 'password' ] )
    }
    return storage_backend.add_user( user )


def login_user( payload, storage_backend ):
    """Check the credentials and issue a bearer token.

    :param dict payload: { "email": "alice@example.com", "password": "secret" }
    :param storage_backend: The active StorageBackend.
    :return: The response body with the user, less its password hash, and the token.
    """

    credentials = LoginSchema().load( payload or {} )
    logging.info( 'Login request for %s.', credentials[ 'email' ] )

    if not credentials[ 'email' ]:
        raise UserInvalidCredentialsError

    user = storage_backend.find_user_by_email( credentials[ 'email' ] )
    if not user or not check_password( credentials[ 'password' ], user.get( 'password_hash' ) ):
        raise UserInvalidCredentialsError

    token = issue_token( user[ 'user_id' ] )
    user = { key: value for key, value in user.items() if key != 'password_hash' }
    return { 'success': True, 'user': user, 'token': token }
