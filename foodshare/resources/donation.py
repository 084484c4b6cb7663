"""Resources entry point for the donation intake forms."""
# pylint: disable=too-few-public-methods
# pylint: disable=no-self-use
from flask import request
from flask_api import status
from flask_restful import Resource

from foodshare.controllers.donation import post_business_donation
from foodshare.controllers.donation import post_financial_donation
from foodshare.controllers.donation import post_flat_file_donation
from foodshare.controllers.donation import post_individual_donation
from foodshare.helpers.storage_handle import get_storage_handle
from foodshare.resources.authenticated import AuthenticatedResource


def submission_status( response ):
    """201 when the submission was stored, 202 when it was only accepted."""

    if response[ 'persisted' ]:
        return status.HTTP_201_CREATED
    return status.HTTP_202_ACCEPTED


class BusinessDonation( AuthenticatedResource ):
    """Flask-RESTful resource endpoint for a business food donation."""

    def post( self ):
        """Endpoint to submit a business donation for the authenticated user."""

        response = post_business_donation(
            self.authenticated_user_id(), request.get_json( silent=True ), get_storage_handle().primary
        )
        return response, submission_status( response )


class IndividualDonation( Resource ):
    """Flask-RESTful resource endpoint for an individual food donation."""

    def post( self ):
        """Endpoint to submit an individual donation."""

        response = post_individual_donation( request.get_json( silent=True ), get_storage_handle().primary )
        return response, submission_status( response )


class FinancialDonation( Resource ):
    """Flask-RESTful resource endpoint for a financial donation."""

    def post( self ):
        """Endpoint to submit a financial donation."""

        response = post_financial_donation( request.get_json( silent=True ), get_storage_handle().primary )
        return response, submission_status( response )


class Donation( AuthenticatedResource ):
    """Flask-RESTful resource endpoint appending a donation to the delimited donation file."""

    def post( self ):
        """Endpoint to submit a donation to the flat file store."""

        response = post_flat_file_donation( request.get_json( silent=True ), get_storage_handle().flat_file )
        return response, status.HTTP_200_OK
