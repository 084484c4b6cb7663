"""The module tests the flat file backend: users.json, the CSV writer, and the endpoints running on files."""
import json
import os
import shutil
import tempfile
import unittest

from foodshare.exceptions.exception_storage import StorageWriteError
from foodshare.exceptions.exception_user import UserDuplicateEmailError
from foodshare.controllers.auth import create_user
from foodshare.helpers.donation_csv import DONATION_CSV_FIELDS
from foodshare.helpers.donation_csv import append_csv_row
from foodshare.helpers.donation_csv import read_csv_rows
from foodshare.helpers.file_backend import FileBackend
from foodshare.helpers.storage_handle import StorageHandle
from foodshare.models.user import PLACEHOLDER_PASSWORD_HASH
from tests.helpers.app_helpers import bearer_headers
from tests.helpers.app_helpers import create_test_app
from tests.helpers.app_helpers import post_json
from tests.helpers.default_dictionaries import get_business_donation_dict
from tests.helpers.default_dictionaries import get_financial_donation_dict
from tests.helpers.default_dictionaries import get_individual_donation_dict
from tests.helpers.default_dictionaries import get_login_dict
from tests.helpers.default_dictionaries import get_registration_dict


class DonationCSVTestCase( unittest.TestCase ):
    """This test suite is designed to verify the delimited donation file format.

    python -m unittest -v tests.test_file_backend.DonationCSVTestCase
    """

    def setUp( self ):
        self.data_directory = tempfile.mkdtemp()
        self.donations_file = os.path.join( self.data_directory, 'donations.csv' )

    def tearDown( self ):
        shutil.rmtree( self.data_directory, ignore_errors=True )

    def test_double_quote_is_doubled( self ):
        """A double quote in the address is written as two and reads back as the original string."""

        address = '7 "Old Mill" Rd, Unit 2'
        append_csv_row( self.donations_file, DONATION_CSV_FIELDS, { 'id': '1', 'address': address } )

        with open( self.donations_file, 'r', encoding='utf-8' ) as csv_file:
            lines = csv_file.read().splitlines()
        self.assertEqual( lines[ 0 ], ','.join( DONATION_CSV_FIELDS ) )
        self.assertIn( '"7 ""Old Mill"" Rd, Unit 2"', lines[ 1 ] )

        rows = read_csv_rows( self.donations_file )
        self.assertEqual( rows[ 0 ][ 'address' ], address )

    def test_header_written_once( self ):
        """Appending twice gives one header and two rows, with missing fields empty."""

        append_csv_row( self.donations_file, DONATION_CSV_FIELDS, { 'id': '1', 'notes': 'line one\nline two' } )
        append_csv_row( self.donations_file, DONATION_CSV_FIELDS, { 'id': '2', 'name': None } )

        rows = read_csv_rows( self.donations_file )
        self.assertEqual( [ row[ 'id' ] for row in rows ], [ '1', '2' ] )
        self.assertEqual( rows[ 0 ][ 'notes' ], 'line one\nline two' )
        self.assertEqual( rows[ 1 ][ 'name' ], '' )
        self.assertEqual( list( rows[ 0 ].keys() ), DONATION_CSV_FIELDS )

    def test_read_missing_file( self ):
        """A file that does not exist has no rows."""

        self.assertEqual( read_csv_rows( self.donations_file ), [] )


class FileBackendTestCase( unittest.TestCase ):
    """This test suite is designed to verify the FileBackend storage operations.

    python -m unittest -v tests.test_file_backend.FileBackendTestCase
    """

    def setUp( self ):
        self.data_directory = os.path.join( tempfile.mkdtemp(), 'data' )
        self.file_backend = FileBackend( self.data_directory )

    def tearDown( self ):
        shutil.rmtree( os.path.dirname( self.data_directory ), ignore_errors=True )

    def test_data_files_created( self ):
        """The data directory, an empty users.json and both CSV headers are created on first use."""

        self.assertTrue( self.file_backend.is_available() )
        with open( self.file_backend.users_file, 'r', encoding='utf-8' ) as users_file:
            self.assertEqual( json.load( users_file ), [] )
        self.assertEqual( read_csv_rows( self.file_backend.donations_file ), [] )
        self.assertTrue( os.path.exists( self.file_backend.financial_donations_file ) )

    def test_add_user_ids( self ):
        """User IDs count up from one."""

        first_user = self.file_backend.add_user( { 'email': 'a@x.com', 'password_hash': 'hash' } )
        second_user = self.file_backend.add_user( { 'email': 'b@x.com', 'password_hash': 'hash' } )
        self.assertEqual( first_user[ 'user_id' ], 1 )
        self.assertEqual( second_user[ 'user_id' ], 2 )
        self.assertEqual( self.file_backend.find_user_by_email( 'b@x.com' )[ 'user_id' ], 2 )
        self.assertIsNone( self.file_backend.find_user_by_email( 'c@x.com' ) )

    def test_create_user_duplicate_email( self ):
        """The registration duplicate check holds on the file backend."""

        registration = {
            'user_type': 'donor', 'name': 'A', 'email': 'a@x.com', 'phone': '1', 'password': 'p'
        }
        create_user( registration, self.file_backend )
        with self.assertRaises( UserDuplicateEmailError ):
            create_user( registration, self.file_backend )
        self.assertEqual( len( self.file_backend.read_users() ), 1 )

    def test_find_or_create_donor( self ):
        """A new email creates a donor with the placeholder hash; a known email reuses the ID."""

        donor_id = self.file_backend.find_or_create_donor( 'Bob', 'bob@example.com', '5550001111', '34 Elm St' )
        self.assertEqual( self.file_backend.find_or_create_donor( 'Bob', 'bob@example.com', '', '' ), donor_id )

        users = self.file_backend.read_users()
        self.assertEqual( len( users ), 1 )
        self.assertEqual( users[ 0 ][ 'password_hash' ], PLACEHOLDER_PASSWORD_HASH )
        self.assertEqual( users[ 0 ][ 'address' ], '34 Elm St' )

    def test_upsert_donor_profile( self ):
        """Business details are kept on the user; an unknown donor is a StorageWriteError."""

        donor_id = self.file_backend.find_or_create_donor( 'Alice', 'alice@example.com', '', '' )
        self.file_backend.upsert_donor_profile( donor_id, 'Corner Bakery', 'bakery' )
        self.file_backend.upsert_donor_profile( donor_id, 'Corner Cafe', 'cafe' )

        user = self.file_backend.find_user_by_email( 'alice@example.com' )
        self.assertEqual( user[ 'business_name' ], 'Corner Cafe' )
        self.assertEqual( user[ 'business_type' ], 'cafe' )

        with self.assertRaises( StorageWriteError ):
            self.file_backend.upsert_donor_profile( donor_id + 1, 'Nobody', 'none' )

    def test_add_donation( self ):
        """A donation row carries the donor's contact details."""

        donor_id = self.file_backend.find_or_create_donor( 'Bob', 'bob@example.com', '5550001111', '34 Elm St' )
        donation_id = self.file_backend.add_donation( donor_id, {
            'donation_type': 'individual',
            'food_type': 'produce',
            'quantity': '1 crate',
            'pickup_date': '2026-10-22',
            'pickup_time': '10:00',
            'pickup_address': '34 Elm St',
            'description': 'Fresh "heirloom" tomatoes'
        } )

        rows = read_csv_rows( self.file_backend.donations_file )
        self.assertEqual( len( rows ), 1 )
        self.assertEqual( rows[ 0 ][ 'id' ], donation_id )
        self.assertEqual( rows[ 0 ][ 'email' ], 'bob@example.com' )
        self.assertEqual( rows[ 0 ][ 'phone' ], '5550001111' )
        self.assertEqual( rows[ 0 ][ 'notes' ], 'Fresh "heirloom" tomatoes' )

    def test_corrupt_users_file( self ):
        """A users.json that is not JSON is reported as a StorageWriteError."""

        self.file_backend.ensure_data_files()
        with open( self.file_backend.users_file, 'w', encoding='utf-8' ) as users_file:
            users_file.write( '{ not json' )
        with self.assertRaises( StorageWriteError ):
            self.file_backend.find_user_by_email( 'a@x.com' )


class APIFileBackendTestCase( unittest.TestCase ):
    """This test suite is designed to verify the endpoints when the application runs on the file backend.

    python -m unittest -v tests.test_file_backend.APIFileBackendTestCase
    """

    def setUp( self ):
        self.data_directory = tempfile.mkdtemp()
        self.file_backend = FileBackend( self.data_directory )
        self.app = create_test_app( self, StorageHandle( self.file_backend, self.file_backend ) )
        self.test_client = self.app.test_client()

    def tearDown( self ):
        shutil.rmtree( self.data_directory, ignore_errors=True )

    def test_register_duplicate_email( self ):
        """Registering the same email twice on the file backend is a 400."""

        response, body = post_json( self.test_client, '/api/register', get_registration_dict() )
        self.assertEqual( response.status_code, 201 )

        response, body = post_json( self.test_client, '/api/register', get_registration_dict() )
        self.assertEqual( response.status_code, 400 )
        self.assertEqual( body, { 'success': False, 'message': 'Email already registered' } )

    def test_login_and_business_donation( self ):
        """Login issues a token for the file user and the business donation lands in the files."""

        post_json( self.test_client, '/api/register', get_registration_dict() )
        response, body = post_json( self.test_client, '/api/login', get_login_dict() )
        self.assertEqual( response.status_code, 200 )
        self.assertEqual( body[ 'user' ][ 'user_id' ], 1 )
        self.assertNotIn( 'password_hash', body[ 'user' ] )

        response, body = post_json(
            self.test_client, '/api/business-donation', get_business_donation_dict(),
            headers=bearer_headers( body[ 'token' ] )
        )
        self.assertEqual( response.status_code, 201 )
        self.assertTrue( body[ 'persisted' ] )

        user = self.file_backend.find_user_by_email( 'alice@example.com' )
        self.assertEqual( user[ 'business_name' ], 'Corner Bakery' )
        rows = read_csv_rows( self.file_backend.donations_file )
        self.assertEqual( rows[ 0 ][ 'donationType' ], 'business' )
        self.assertEqual( rows[ 0 ][ 'address' ], '12 Main St' )

    def test_individual_and_financial_donation( self ):
        """The implicit donor is created once and both donations are written."""

        payload = get_individual_donation_dict( { 'individualEmail': 'dana@example.com' } )
        response, body = post_json( self.test_client, '/api/individual-donation', payload )
        self.assertEqual( response.status_code, 201 )

        response, body = post_json( self.test_client, '/api/financial-donation', get_financial_donation_dict() )
        self.assertEqual( response.status_code, 201 )

        users = self.file_backend.read_users()
        self.assertEqual( len( users ), 1 )

        financial_rows = read_csv_rows( self.file_backend.financial_donations_file )
        self.assertEqual( len( financial_rows ), 1 )
        self.assertEqual( financial_rows[ 0 ][ 'donorId' ], str( users[ 0 ][ 'user_id' ] ) )
        self.assertEqual( financial_rows[ 0 ][ 'amount' ], '25.00' )
        self.assertEqual( financial_rows[ 0 ][ 'frequency' ], 'monthly' )
        self.assertEqual( financial_rows[ 0 ][ 'isAnonymous' ], 'true' )

    def test_heartbeat( self ):
        """Heartbeat API names the file backend."""

        response = self.test_client.get( '/api/heartbeat' )
        self.assertEqual( response.get_json(), { 'success': True, 'backend': 'file', 'available': True } )


if __name__ == '__main__':
    unittest.main()
