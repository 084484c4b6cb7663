"""Create instantiations of SQLAlchemy, Marshmallow and the JWT manager: Helps to synchronize sessions."""
from flask_jwt_extended import JWTManager
from flask_marshmallow import Marshmallow
from flask_sqlalchemy import SQLAlchemy

database = SQLAlchemy()  # pylint: disable=invalid-name
marshmallow = Marshmallow()  # pylint: disable=invalid-name
jwt = JWTManager()  # pylint: disable=invalid-name
