"""The flat file storage backend, used when the database is unreachable and always by /api/donate.

    <data_directory>/users.json                JSON array of user objects, business details kept on the user.
    <data_directory>/donations.csv             Food donations, see DONATION_CSV_FIELDS.
    <data_directory>/financial_donations.csv   Financial donations, see FINANCIAL_DONATION_CSV_FIELDS.

Writes are not synchronized: two registrations reading the same users.json snapshot race and the last writer wins.
"""
import json
import logging
import os
import uuid
from datetime import datetime

from foodshare.exceptions.exception_storage import StorageWriteError
from foodshare.helpers.donation_csv import DONATION_CSV_FIELDS
from foodshare.helpers.donation_csv import FINANCIAL_DONATION_CSV_FIELDS
from foodshare.helpers.donation_csv import append_csv_row
from foodshare.helpers.donation_csv import ensure_csv_file
from foodshare.helpers.storage_backend import StorageBackend
from foodshare.models.user import PLACEHOLDER_PASSWORD_HASH

USERS_FILE_NAME = 'users.json'
DONATIONS_FILE_NAME = 'donations.csv'
FINANCIAL_DONATIONS_FILE_NAME = 'financial_donations.csv'


class FileBackend( StorageBackend ):
    """Stores users in a JSON file and donations in append-only CSV files."""

    name = 'file'

    def __init__( self, data_directory ):
        self.data_directory = data_directory
        self.users_file = os.path.join( data_directory, USERS_FILE_NAME )
        self.donations_file = os.path.join( data_directory, DONATIONS_FILE_NAME )
        self.financial_donations_file = os.path.join( data_directory, FINANCIAL_DONATIONS_FILE_NAME )

    def ensure_data_files( self ):
        """Create the data directory, an empty users.json and the donation CSV headers if missing."""

        try:
            os.makedirs( self.data_directory, exist_ok=True )
            if not os.path.exists( self.users_file ):
                with open( self.users_file, 'w', encoding='utf-8' ) as users_file:
                    users_file.write( '[]' )
            ensure_csv_file( self.donations_file, DONATION_CSV_FIELDS )
            ensure_csv_file( self.financial_donations_file, FINANCIAL_DONATION_CSV_FIELDS )
        except OSError as error:
            raise StorageWriteError( self.name, str( error ) )

    def is_available( self ):
        try:
            self.ensure_data_files()
        except StorageWriteError:
            logging.exception( 'The data directory %s is not writable.', self.data_directory )
            return False
        return os.access( self.data_directory, os.W_OK )

    def read_users( self ):
        """Return the list of user dictionaries."""

        self.ensure_data_files()
        try:
            with open( self.users_file, 'r', encoding='utf-8' ) as users_file:
                return json.load( users_file )
        except ( OSError, ValueError ) as error:
            raise StorageWriteError( self.name, 'Unable to read {}: {}'.format( self.users_file, error ) )

    def write_users( self, users ):
        """Replace the content of users.json."""

        try:
            with open( self.users_file, 'w', encoding='utf-8' ) as users_file:
                json.dump( users, users_file, indent=2 )
        except OSError as error:
            raise StorageWriteError( self.name, 'Unable to write {}: {}'.format( self.users_file, error ) )

    def find_user_by_email( self, email ):
        for user in self.read_users():
            if user.get( 'email' ) == email:
                return user
        return None

    def find_user_by_id( self, user_id ):
        """Return the user dictionary for the ID, or None."""

        for user in self.read_users():
            if user.get( 'user_id' ) == user_id:
                return user
        return None

    def add_user( self, user ):
        users = self.read_users()
        new_user = {
            'user_id': next_user_id( users ),
            'user_type': user.get( 'user_type', 'donor' ),
            'name': user.get( 'name', '' ),
            'email': user[ 'email' ],
            'phone': user.get( 'phone', '' ),
            'address': user.get( 'address' ),
            'password_hash': user[ 'password_hash' ],
            'created_at': datetime.utcnow().isoformat()
        }
        users.append( new_user )
        self.write_users( users )
        return new_user

    def find_or_create_donor( self, name, email, phone, address ):
        user = self.find_user_by_email( email )
        if user:
            return user[ 'user_id' ]
        user = self.add_user( {
            'user_type': 'donor',
            'name': name,
            'email': email,
            'phone': phone,
            'address': address,
            'password_hash': PLACEHOLDER_PASSWORD_HASH
        } )
        return user[ 'user_id' ]

    def upsert_donor_profile( self, donor_id, business_name, business_type ):
        users = self.read_users()
        for user in users:
            if user.get( 'user_id' ) == donor_id:
                user[ 'business_name' ] = business_name
                user[ 'business_type' ] = business_type
                self.write_users( users )
                return
        raise StorageWriteError( self.name, 'Donor {} was not found in {}.'.format( donor_id, self.users_file ) )

    def add_donation( self, donor_id, donation ):
        donor = self.find_user_by_id( donor_id ) or {}
        row = {
            'id': generate_record_id(),
            'donationType': donation.get( 'donation_type', '' ),
            'name': donor.get( 'name', '' ),
            'email': donor.get( 'email', '' ),
            'phone': donor.get( 'phone', '' ),
            'address': donation.get( 'pickup_address', '' ),
            'foodType': donation.get( 'food_type', '' ),
            'quantity': donation.get( 'quantity', '' ),
            'pickupDate': donation.get( 'pickup_date', '' ),
            'pickupTime': donation.get( 'pickup_time', '' ),
            'notes': donation.get( 'description', '' ),
            'timestamp': datetime.utcnow().isoformat()
        }
        self.append_row( self.donations_file, DONATION_CSV_FIELDS, row )
        return row[ 'id' ]

    def add_financial_donation( self, donor_id, financial_donation ):
        donor = self.find_user_by_id( donor_id ) or {}
        row = {
            'id': generate_record_id(),
            'donorId': donor_id,
            'name': donor.get( 'name', '' ),
            'email': donor.get( 'email', '' ),
            'amount': financial_donation.get( 'amount' ),
            'frequency': financial_donation.get( 'frequency', '' ),
            'paymentMethod': financial_donation.get( 'payment_method', '' ),
            'isAnonymous': bool( financial_donation.get( 'is_anonymous' ) ),
            'comments': financial_donation.get( 'comments', '' ),
            'timestamp': datetime.utcnow().isoformat()
        }
        self.append_row( self.financial_donations_file, FINANCIAL_DONATION_CSV_FIELDS, row )
        return row[ 'id' ]

    def add_flat_file_donation( self, submission ):
        """Append a raw /api/donate submission, stamped with an ID and a timestamp.

        :param dict submission: Deserialized by FlatFileDonationSchema.
        :return: The row as written.
        """

        row = {
            'id': generate_record_id(),
            'donationType': submission.get( 'donation_type', '' ),
            'name': submission.get( 'name', '' ),
            'email': submission.get( 'email', '' ),
            'phone': submission.get( 'phone', '' ),
            'address': submission.get( 'address', '' ),
            'foodType': submission.get( 'food_type', '' ),
            'quantity': submission.get( 'quantity', '' ),
            'pickupDate': submission.get( 'pickup_date', '' ),
            'pickupTime': submission.get( 'pickup_time', '' ),
            'notes': submission.get( 'notes', '' ),
            'timestamp': datetime.utcnow().isoformat()
        }
        return self.append_row( self.donations_file, DONATION_CSV_FIELDS, row )

    def append_row( self, file_path, field_names, row ):
        """Append to one of the CSV files, reporting file system errors as StorageWriteError."""

        try:
            return append_csv_row( file_path, field_names, row )
        except OSError as error:
            raise StorageWriteError( self.name, 'Unable to append to {}: {}'.format( file_path, error ) )


def next_user_id( users ):
    """One more than the highest user_id in the file, starting at 1."""

    if not users:
        return 1
    return max( user.get( 'user_id' ) or 0 for user in users ) + 1


def generate_record_id():
    """A unique ID for a row of a CSV file."""

    return uuid.uuid4().hex
