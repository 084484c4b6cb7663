"""The model for the FoodShare API service: users table.

Tables are explicitly named. Notice that the database=SQLAlchemy() is done through the import of flask_essentials.
This will keep the Marshmallow and model SQLAlchemy sessions the same.

Users created implicitly by an individual or financial donation carry PLACEHOLDER_PASSWORD_HASH, which is not a
valid bcrypt hash and can never authenticate.
"""
# pylint: disable=R0903
from datetime import datetime

from foodshare.flask_essentials import database

PLACEHOLDER_PASSWORD_HASH = 'placeholder_hash'
USER_TYPES = ( 'donor', 'recipient', 'volunteer', 'admin' )


class UserModel( database.Model ):
    """Users model for donors, recipients, volunteers and administrators."""

    __tablename__ = 'users'
    user_id = database.Column(
        database.Integer, primary_key=True,
        autoincrement=True, nullable=False
    )
    user_type = database.Column(
        database.Enum( *USER_TYPES, native_enum=False, name='user_type' ),
        nullable=False, default='donor'
    )
    name = database.Column( database.VARCHAR( 100 ), nullable=False, default='' )
    email = database.Column( database.VARCHAR( 100 ), nullable=False, unique=True )
    phone = database.Column( database.VARCHAR( 20 ), nullable=True, default='' )
    address = database.Column( database.Text, nullable=True, default=None )
    password_hash = database.Column( database.VARCHAR( 255 ), nullable=False )
    created_at = database.Column( database.DateTime, nullable=False, default=datetime.utcnow )
