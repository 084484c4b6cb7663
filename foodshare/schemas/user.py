"""Marshmallow schema module for UserModel and the registration and login payloads."""
# pylint: disable=too-few-public-methods
from marshmallow import EXCLUDE
from marshmallow import fields
from marshmallow import Schema
from marshmallow import validate
from marshmallow_sqlalchemy import SQLAlchemyAutoSchema

from foodshare.flask_essentials import database
from foodshare.models.user import USER_TYPES
from foodshare.models.user import UserModel


class UserSchema( SQLAlchemyAutoSchema ):
    """Marshmallow schema for serialization/deserialization of UserModel.

    Use UserSchema( exclude=( 'password_hash', ) ) to build what is returned to a client.
    """

    class Meta:
        """Meta object for Marshmallow schema."""

        model = UserModel
        load_instance = True
        sqla_session = database.session


class RegistrationSchema( Schema ):
    """The payload for POST /api/register.

    The form is checked in the browser. Here only the email and password the users table stores are required, and
    user_type must be a value its enum column accepts.
    """

    class Meta:
        """Meta object for Marshmallow schema."""

        unknown = EXCLUDE

    name = fields.String( load_default='' )
    email = fields.String( required=True, validate=validate.Length( min=1 ) )
    phone = fields.String( load_default='' )
    password = fields.String( required=True, validate=validate.Length( min=1 ) )
    user_type = fields.String(
        data_key='userType', load_default='donor', validate=validate.OneOf( USER_TYPES )
    )


class LoginSchema( Schema ):
    """The payload for POST /api/login. A missing field fails as invalid credentials."""

    class Meta:
        """Meta object for Marshmallow schema."""

        unknown = EXCLUDE

    email = fields.String( load_default='' )
    password = fields.String( load_default='' )
