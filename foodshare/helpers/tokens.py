"""Issue and verify the signed bearer tokens handed out on login.

The identity of the token is the user ID as a string, and the user ID is also carried as the integer claim user_id.
The lifetime comes from JWT_ACCESS_TOKEN_EXPIRES, set in create_app() from JWT_EXPIRES_HOURS.
"""
from flask_jwt_extended import create_access_token
from flask_jwt_extended import decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from foodshare.exceptions.exception_jwt import JWTInvalidTokenError
from foodshare.exceptions.exception_jwt import JWTUnauthenticatedError

USER_ID_CLAIM = 'user_id'


def issue_token( user_id, expires_delta=None ):
    """Create a signed access token for the user.

    :param int user_id: The user ID to carry as a claim.
    :param expires_delta: Optional datetime.timedelta overriding the configured lifetime.
    :return: The encoded token.
    """

    if expires_delta is None:
        return create_access_token( identity=str( user_id ), additional_claims={ USER_ID_CLAIM: user_id } )
    return create_access_token(
        identity=str( user_id ), additional_claims={ USER_ID_CLAIM: user_id }, expires_delta=expires_delta
    )


def verify_token( token ):
    """Verify the signature and lifetime of a token and return its claims.

    Requests to the endpoints are verified by jwt_required() on AuthenticatedResource and the token loaders in
    create_app(). This is the same check for a token held outside a request, raising the exceptions those loaders
    answer with: JWTUnauthenticatedError for no token and JWTInvalidTokenError for a bad or expired one.

    :param str token: The encoded token, without the Bearer prefix.
    :return: The decoded claims.
    """

    if not token:
        raise JWTUnauthenticatedError
    try:
        return decode_token( token )
    except ( PyJWTError, JWTExtendedException ):
        raise JWTInvalidTokenError
