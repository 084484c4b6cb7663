"""Resources entry point to register and log in users."""
# pylint: disable=too-few-public-methods
# pylint: disable=no-self-use
from flask import request
from flask_api import status
from flask_restful import Resource

from foodshare.controllers.auth import login_user
from foodshare.controllers.auth import register_user
from foodshare.helpers.storage_handle import get_storage_handle


class Register( Resource ):
    """Flask-RESTful resource endpoint to register a user."""

    def post( self ):
        """Endpoint to register a user: 201 on success, 400 if the email is already registered."""

        storage_handle = get_storage_handle()
        response = register_user( request.get_json( silent=True ), storage_handle.primary, storage_handle.failover )
        return response, status.HTTP_201_CREATED


class Login( Resource ):
    """Flask-RESTful resource endpoint to log a user in."""

    def post( self ):
        """Endpoint to exchange credentials for a bearer token: 200 on success, 401 otherwise."""

        response = login_user( request.get_json( silent=True ), get_storage_handle().primary )
        return response, status.HTTP_200_OK
