"""The relational storage backend: MySQL through Flask-SQLAlchemy and the models in foodshare.models.

Each operation commits on its own. The donor profile upsert and the donation insert made for a business donation
are two independent commits, so a failure between them leaves one without the other.
"""
import logging

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.exc import InterfaceError
from sqlalchemy.exc import OperationalError
from sqlalchemy.exc import SQLAlchemyError

from foodshare.exceptions.exception_storage import StorageUnavailableError
from foodshare.exceptions.exception_storage import StorageWriteError
from foodshare.exceptions.exception_user import UserDuplicateEmailError
from foodshare.flask_essentials import database
from foodshare.helpers.storage_backend import StorageBackend
from foodshare.models.donation import DonationModel
from foodshare.models.donor_profile import DonorProfileModel
from foodshare.models.financial_donation import FinancialDonationModel
from foodshare.models.user import PLACEHOLDER_PASSWORD_HASH
from foodshare.models.user import UserModel
from foodshare.schemas.user import UserSchema

# MySQL client and server codes for a server that cannot be reached or refuses the credentials.
CONNECTION_ERROR_CODES = {
    1044,  # ER_DBACCESS_DENIED_ERROR
    1045,  # ER_ACCESS_DENIED_ERROR
    2002,  # CR_CONNECTION_ERROR
    2003,  # CR_CONN_HOST_ERROR
    2005,  # CR_UNKNOWN_HOST
    2006,  # CR_SERVER_GONE_ERROR
    2013   # CR_SERVER_LOST
}


class RelationalBackend( StorageBackend ):
    """Stores users and donations in the users, donor_profiles, donations and financial_donations tables."""

    name = 'relational'

    def is_available( self ):
        try:
            database.session.execute( text( 'SELECT 1' ) )
        except SQLAlchemyError:
            database.session.rollback()
            logging.exception( 'The database is not reachable.' )
            return False
        return True

    def find_user_by_email( self, email ):
        try:
            user_model = UserModel.query.filter_by( email=email ).one_or_none()
        except SQLAlchemyError as error:
            raise self.storage_error( error )
        if not user_model:
            return None
        return UserSchema().dump( user_model )

    def add_user( self, user ):
        user_model = UserModel(
            user_type=user.get( 'user_type', 'donor' ),
            name=user.get( 'name', '' ),
            email=user[ 'email' ],
            phone=user.get( 'phone', '' ),
            address=user.get( 'address' ),
            password_hash=user[ 'password_hash' ]
        )
        try:
            database.session.add( user_model )
            database.session.commit()
        except IntegrityError:
            database.session.rollback()
            raise UserDuplicateEmailError
        except SQLAlchemyError as error:
            raise self.storage_error( error )
        return UserSchema().dump( user_model )

    def find_or_create_donor( self, name, email, phone, address ):
        user = self.find_user_by_email( email )
        if user:
            return user[ 'user_id' ]
        try:
            user = self.add_user( {
                'user_type': 'donor',
                'name': name,
                'email': email,
                'phone': phone,
                'address': address,
                'password_hash': PLACEHOLDER_PASSWORD_HASH
            } )
        except UserDuplicateEmailError:
            # Another request inserted the email between the lookup and the insert.
            user = self.find_user_by_email( email )
            if not user:
                raise StorageWriteError( self.name, 'Donor {} could not be created or found.'.format( email ) )
        return user[ 'user_id' ]

    def upsert_donor_profile( self, donor_id, business_name, business_type ):
        try:
            profile_model = DonorProfileModel.query.filter_by( donor_id=donor_id ).one_or_none()
            if not profile_model:
                profile_model = DonorProfileModel( donor_id=donor_id )
                database.session.add( profile_model )
            profile_model.business_name = business_name
            profile_model.business_type = business_type
            database.session.commit()
        except SQLAlchemyError as error:
            raise self.storage_error( error )
        return profile_model.profile_id

    def add_donation( self, donor_id, donation ):
        donation_model = DonationModel(
            donor_id=donor_id,
            food_type=donation.get( 'food_type', '' ),
            quantity=donation.get( 'quantity', '' ),
            pickup_date=donation.get( 'pickup_date', '' ),
            pickup_time=donation.get( 'pickup_time', '' ),
            pickup_address=donation.get( 'pickup_address' ),
            description=donation.get( 'description' ),
            status='available'
        )
        try:
            database.session.add( donation_model )
            database.session.commit()
        except SQLAlchemyError as error:
            raise self.storage_error( error )
        return donation_model.donation_id

    def add_financial_donation( self, donor_id, financial_donation ):
        financial_donation_model = FinancialDonationModel(
            donor_id=donor_id,
            amount=financial_donation.get( 'amount' ),
            donation_frequency=financial_donation.get( 'frequency', 'one-time' ),
            payment_method=financial_donation.get( 'payment_method', '' ),
            is_anonymous=bool( financial_donation.get( 'is_anonymous' ) ),
            comments=financial_donation.get( 'comments' )
        )
        try:
            database.session.add( financial_donation_model )
            database.session.commit()
        except SQLAlchemyError as error:
            raise self.storage_error( error )
        return financial_donation_model.financial_donation_id

    def storage_error( self, error ):
        """Roll back and translate a SQLAlchemy error into the storage exception the controllers handle."""

        database.session.rollback()
        if is_connection_error( error ):
            return StorageUnavailableError( self.name )
        return StorageWriteError( self.name, str( getattr( error, 'orig', error ) ) )


def is_connection_error( error ):
    """Return True for the SQLAlchemy errors raised when the server is unreachable or refuses the credentials."""

    if not isinstance( error, ( OperationalError, InterfaceError ) ):
        return False
    if getattr( error, 'connection_invalidated', False ):
        return True
    arguments = getattr( getattr( error, 'orig', None ), 'args', () )
    return bool( arguments ) and arguments[ 0 ] in CONNECTION_ERROR_CODES
