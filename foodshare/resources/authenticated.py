"""A Flask-RESTful resource whose methods all require a valid bearer token."""
# pylint: disable=too-few-public-methods
from flask_jwt_extended import get_jwt
from flask_jwt_extended import jwt_required
from flask_restful import Resource

from foodshare.helpers.tokens import USER_ID_CLAIM


class AuthenticatedResource( Resource ):
    """Verify the bearer token before the method runs.

    A missing token is answered with 401 and an invalid or expired one with 403, by the loaders registered in
    create_app(), so the method body and any storage call behind it never run.
    """

    method_decorators = [ jwt_required() ]

    @staticmethod
    def authenticated_user_id():
        """The user ID claim of the verified token."""

        return get_jwt()[ USER_ID_CLAIM ]
