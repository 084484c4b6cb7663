"""Resources entry point to test the health of the application."""
# pylint: disable=too-few-public-methods
# pylint: disable=no-self-use
from flask_api import status
from flask_restful import Resource

from foodshare.controllers.app_health import heartbeat
from foodshare.helpers.storage_handle import get_storage_handle


class Heartbeat( Resource ):
    """Flask-RESTful resource endpoint to test the heartbeat of the application."""

    def get( self ):
        """Endpoint to to see if the application is running."""

        return heartbeat( get_storage_handle().primary ), status.HTTP_200_OK
