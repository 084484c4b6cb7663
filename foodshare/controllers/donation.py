"""Controllers for Flask-RESTful resources: handle the business logic for the donation intake endpoints.

The business, individual and financial donations are accepted even when they cannot be stored. The storage error is
logged and the response says persisted: false, so the caller can tell a saved donation from one that was only
accepted.
"""
import logging

from foodshare.exceptions.exception_storage import StorageError
from foodshare.schemas.donation import BusinessDonationSchema
from foodshare.schemas.donation import FlatFileDonationSchema
from foodshare.schemas.donation import IndividualDonationSchema
from foodshare.schemas.financial_donation import FinancialDonationRequestSchema


def post_business_donation( user_id, payload, storage_backend ):
    """Record a business donation for the authenticated user.

    The donor profile is upserted with the business name and type, then the donation is added with status available.

    :param int user_id: The user ID claim of the bearer token.
    :param dict payload: The business donation form.
    :param storage_backend: The active StorageBackend.
    :return: The response body.
    """

    donation = BusinessDonationSchema().load( payload or {} )

    def persist():
        storage_backend.upsert_donor_profile( user_id, donation[ 'business_name' ], donation[ 'business_type' ] )
        return storage_backend.add_donation( user_id, build_food_donation( 'business', donation ) )

    return record_submission( persist, 'Business donation' )


def post_individual_donation( payload, storage_backend ):
    """Record an individual donation, creating the donor from the email if needed.

    :param dict payload: The individual donation form.
    :param storage_backend: The active StorageBackend.
    :return: The response body.
    """

    donation = IndividualDonationSchema().load( payload or {} )

    def persist():
        donor_id = storage_backend.find_or_create_donor(
            donation[ 'name' ], donation[ 'email' ], donation[ 'phone' ], donation[ 'address' ]
        )
        return storage_backend.add_donation( donor_id, build_food_donation( 'individual', donation ) )

    return record_submission( persist, 'Individual donation' )


def post_financial_donation( payload, storage_backend ):
    """Record a financial donation, creating the donor from the email if needed. No payment is made.

    :param dict payload: The financial donation form.
    :param storage_backend: The active StorageBackend.
    :return: The response body.
    """

    donation = FinancialDonationRequestSchema().load( payload or {} )

    def persist():
        donor_id = storage_backend.find_or_create_donor(
            donation[ 'name' ], donation[ 'email' ], donation[ 'phone' ], None
        )
        return storage_backend.add_financial_donation( donor_id, donation )

    return record_submission( persist, 'Financial donation' )


def post_flat_file_donation( payload, file_backend ):
    """Append a donation to the delimited donation file, whatever backend is active.

    :param dict payload: The donation form.
    :param file_backend: The FileBackend.
    :return: The response body.
    """

    submission = FlatFileDonationSchema().load( payload or {} )
    row = file_backend.add_flat_file_donation( submission )
    logging.info( 'Donation %s appended to %s.', row[ 'id' ], file_backend.donations_file )
    return { 'success': True, 'message': 'Donation submitted successfully' }


def build_food_donation( donation_type, donation ):
    """Map a deserialized food donation form onto the dictionary the backends store."""

    return {
        'donation_type': donation_type,
        'food_type': donation[ 'food_type' ],
        'quantity': donation[ 'quantity' ],
        'pickup_date': donation[ 'pickup_date' ],
        'pickup_time': donation[ 'pickup_time' ],
        'pickup_address': donation[ 'address' ],
        'description': donation[ 'notes' ]
    }


def record_submission( persist, description ):
    """Run the storage calls for a submission and build the response body.

    :param persist: Callable making the storage calls and returning the new record ID.
    :param str description: What was submitted, e.g. 'Business donation'.
    :return: The response body, with persisted set to False if the storage failed.
    """

    try:
        record_id = persist()
    except StorageError as error:
        logging.exception( error.message )
        return {
            'success': True,
            'persisted': False,
            'message': '{} accepted but could not be saved'.format( description )
        }

    logging.info( '%s saved with id: %s', description, record_id )
    return {
        'success': True,
        'persisted': True,
        'message': '{} submitted successfully'.format( description )
    }
