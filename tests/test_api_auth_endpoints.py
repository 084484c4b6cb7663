"""The module tests the registration and login endpoints on the relational backend and the failover to files."""
import shutil
import tempfile
import unittest

from sqlalchemy.exc import OperationalError
from sqlalchemy.exc import ProgrammingError

from foodshare.flask_essentials import database
from foodshare.helpers.file_backend import FileBackend
from foodshare.helpers.passwords import check_password
from foodshare.helpers.relational_backend import is_connection_error
from foodshare.helpers.storage_handle import StorageHandle
from foodshare.helpers.tokens import verify_token
from foodshare.models.user import UserModel
from tests.helpers.app_helpers import create_test_app
from tests.helpers.app_helpers import post_json
from tests.helpers.default_dictionaries import PASSWORD
from tests.helpers.default_dictionaries import get_individual_donation_dict
from tests.helpers.default_dictionaries import get_login_dict
from tests.helpers.default_dictionaries import get_registration_dict
from tests.helpers.mock_storage_backends import UnreachableRelationalBackend


class APIAuthEndpointsTestCase( unittest.TestCase ):
    """This test suite is designed to verify registration and login against the relational backend.

    python -m unittest -v tests.test_api_auth_endpoints.APIAuthEndpointsTestCase
    """

    def setUp( self ):
        self.app = create_test_app( self )
        self.test_client = self.app.test_client()

    def tearDown( self ):
        with self.app.app_context():
            database.session.remove()

    def test_register_user( self ):
        """Register API ( methods = [ POST ] )."""

        response, body = post_json( self.test_client, '/api/register', get_registration_dict() )
        self.assertEqual( response.status_code, 201 )
        self.assertEqual( body, { 'success': True, 'message': 'Registration successful' } )

        with self.app.app_context():
            user_model = UserModel.query.filter_by( email='alice@example.com' ).one()
            self.assertEqual( user_model.user_type, 'donor' )
            self.assertEqual( user_model.name, 'Alice Baker' )
            self.assertNotEqual( user_model.password_hash, PASSWORD )
            self.assertTrue( user_model.password_hash.startswith( '$2b$10$' ) )
            self.assertTrue( check_password( PASSWORD, user_model.password_hash ) )

    def test_register_duplicate_email( self ):
        """A second registration with the same email is refused with a 400."""

        payload = { 'name': 'A', 'email': 'a@x.com', 'phone': '1', 'password': 'p', 'userType': 'donor' }
        response, body = post_json( self.test_client, '/api/register', payload )
        self.assertEqual( response.status_code, 201 )

        response, body = post_json( self.test_client, '/api/register', payload )
        self.assertEqual( response.status_code, 400 )
        self.assertEqual( body, { 'success': False, 'message': 'Email already registered' } )

        with self.app.app_context():
            self.assertEqual( UserModel.query.filter_by( email='a@x.com' ).count(), 1 )

    def test_register_without_password( self ):
        """A registration payload missing the password is a 400 and nothing is stored."""

        payload = get_registration_dict()
        del payload[ 'password' ]
        response, body = post_json( self.test_client, '/api/register', payload )
        self.assertEqual( response.status_code, 400 )
        self.assertFalse( body[ 'success' ] )
        self.assertIn( 'password', body[ 'message' ] )

        with self.app.app_context():
            self.assertEqual( UserModel.query.count(), 0 )

    def test_register_unknown_user_type( self ):
        """The userType must be one of the known roles."""

        response, body = post_json(
            self.test_client, '/api/register', get_registration_dict( { 'userType': 'superuser' } )
        )
        self.assertEqual( response.status_code, 400 )
        self.assertIn( 'userType', body[ 'message' ] )

    def test_login( self ):
        """Login API ( methods = [ POST ] ): the token carries the user ID and the hash is not returned."""

        post_json( self.test_client, '/api/register', get_registration_dict() )

        response, body = post_json( self.test_client, '/api/login', get_login_dict() )
        self.assertEqual( response.status_code, 200 )
        self.assertTrue( body[ 'success' ] )
        self.assertNotIn( 'password_hash', body[ 'user' ] )
        self.assertEqual( body[ 'user' ][ 'email' ], 'alice@example.com' )

        with self.app.app_context():
            user_model = UserModel.query.filter_by( email='alice@example.com' ).one()
            self.assertEqual( body[ 'user' ][ 'user_id' ], user_model.user_id )
            claims = verify_token( body[ 'token' ] )
            self.assertEqual( claims[ 'user_id' ], user_model.user_id )
            self.assertEqual( claims[ 'sub' ], str( user_model.user_id ) )

    def test_login_wrong_password( self ):
        """A password that does not match is a 401."""

        post_json( self.test_client, '/api/register', get_registration_dict() )

        response, body = post_json( self.test_client, '/api/login', get_login_dict( { 'password': 'wrong' } ) )
        self.assertEqual( response.status_code, 401 )
        self.assertEqual( body, { 'success': False, 'message': 'Invalid credentials' } )

    def test_login_unknown_email( self ):
        """An email that was never registered is a 401."""

        response, body = post_json( self.test_client, '/api/login', get_login_dict() )
        self.assertEqual( response.status_code, 401 )
        self.assertEqual( body[ 'message' ], 'Invalid credentials' )

    def test_login_missing_fields( self ):
        """A login without an email or a password is a 401, like any other bad credentials."""

        post_json( self.test_client, '/api/register', get_registration_dict() )

        for payload in ( { 'password': PASSWORD }, { 'email': 'alice@example.com' }, {} ):
            response, body = post_json( self.test_client, '/api/login', payload )
            self.assertEqual( response.status_code, 401 )
            self.assertEqual( body, { 'success': False, 'message': 'Invalid credentials' } )

    def test_register_email_format_not_enforced( self ):
        """The email format is checked by the form, so an address the browser let through is stored as given."""

        response, body = post_json( self.test_client, '/api/register', get_registration_dict( { 'email': 'bob' } ) )
        self.assertEqual( response.status_code, 201 )
        self.assertTrue( body[ 'success' ] )

        with self.app.app_context():
            self.assertEqual( UserModel.query.filter_by( email='bob' ).count(), 1 )

    def test_login_implicit_donor( self ):
        """A donor created by an individual donation has a placeholder hash that never authenticates."""

        post_json( self.test_client, '/api/individual-donation', get_individual_donation_dict() )

        for password in ( 'placeholder_hash', '', PASSWORD ):
            response, body = post_json(
                self.test_client, '/api/login', { 'email': 'bob@example.com', 'password': password }
            )
            self.assertEqual( response.status_code, 401 )
            self.assertFalse( body[ 'success' ] )

    def test_connection_error_classification( self ):
        """Refused connections and denied credentials fail over; other database errors do not."""

        refused = OperationalError( 'SELECT 1', {}, Exception( 2003, "Can't connect to MySQL server" ) )
        denied = OperationalError( 'SELECT 1', {}, Exception( 1045, 'Access denied for user' ) )
        syntax = ProgrammingError( 'SELEC 1', {}, Exception( 1064, 'You have an error in your SQL syntax' ) )
        missing_table = OperationalError( 'SELECT 1', {}, Exception( 'no such table: users' ) )

        self.assertTrue( is_connection_error( refused ) )
        self.assertTrue( is_connection_error( denied ) )
        self.assertFalse( is_connection_error( syntax ) )
        self.assertFalse( is_connection_error( missing_table ) )


class APIRegisterFailoverTestCase( unittest.TestCase ):
    """This test suite is designed to verify that registration silently fails over to the file backend.

    python -m unittest -v tests.test_api_auth_endpoints.APIRegisterFailoverTestCase
    """

    def setUp( self ):
        self.data_directory = tempfile.mkdtemp()
        self.relational_backend = UnreachableRelationalBackend()
        self.file_backend = FileBackend( self.data_directory )
        self.app = create_test_app( self, StorageHandle( self.relational_backend, self.file_backend ) )
        self.test_client = self.app.test_client()

    def tearDown( self ):
        shutil.rmtree( self.data_directory, ignore_errors=True )

    def test_register_fails_over_to_file( self ):
        """The caller sees a 201 and the user lands in users.json."""

        response, body = post_json( self.test_client, '/api/register', get_registration_dict() )
        self.assertEqual( response.status_code, 201 )
        self.assertEqual( body, { 'success': True, 'message': 'Registration successful' } )
        self.assertEqual( self.relational_backend.calls, [ 'find_user_by_email' ] )

        user = self.file_backend.find_user_by_email( 'alice@example.com' )
        self.assertEqual( user[ 'user_id' ], 1 )
        self.assertEqual( user[ 'user_type' ], 'donor' )
        self.assertTrue( check_password( PASSWORD, user[ 'password_hash' ] ) )

    def test_register_duplicate_after_failover( self ):
        """The duplicate check runs against the failover backend too."""

        post_json( self.test_client, '/api/register', get_registration_dict() )

        response, body = post_json( self.test_client, '/api/register', get_registration_dict() )
        self.assertEqual( response.status_code, 400 )
        self.assertEqual( body[ 'message' ], 'Email already registered' )
        self.assertEqual( len( self.file_backend.read_users() ), 1 )

    def test_login_does_not_fail_over( self ):
        """Login against an unreachable database is a generic 500."""

        response, body = post_json( self.test_client, '/api/login', get_login_dict() )
        self.assertEqual( response.status_code, 500 )
        self.assertEqual( body, { 'success': False, 'message': 'Server error' } )


if __name__ == '__main__':
    unittest.main()
