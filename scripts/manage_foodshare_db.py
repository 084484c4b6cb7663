"""The following script creates the FoodShare tables, or drops and recreates them.

Use drop_all_and_create() with caution! It will remove all existing data, and then reconstruct the tables with no
entries. The configuration is read as for the application, so export APP_ENV and the DB_* variables first. To run a
function navigate to the project root and, for example, on the command line type:

python -c "import scripts.manage_foodshare_db;scripts.manage_foodshare_db.create_database_tables()"
python -c "import scripts.manage_foodshare_db;scripts.manage_foodshare_db.drop_all_and_create()"
"""
import logging

from foodshare.app import create_app
from foodshare.flask_essentials import database
from foodshare.helpers.storage_handle import StorageHandle
from foodshare.helpers.relational_backend import RelationalBackend

# Importing the models registers their tables on database.metadata.
from foodshare.models.donation import DonationModel  # noqa: F401 pylint: disable=unused-import
from foodshare.models.donor_profile import DonorProfileModel  # noqa: F401 pylint: disable=unused-import
from foodshare.models.financial_donation import FinancialDonationModel  # noqa: F401 pylint: disable=unused-import
from foodshare.models.user import UserModel  # noqa: F401 pylint: disable=unused-import


def get_app():
    """The application, without probing the database for a storage backend."""

    relational_backend = RelationalBackend()
    return create_app( storage_handle=StorageHandle( relational_backend, relational_backend ) )


def create_database_tables():
    """A function to create any missing FoodShare tables."""

    app = get_app()
    with app.app_context():
        database.create_all()
        logging.info( 'Database schema created successfully.' )


def drop_all_and_create():
    """A function to drop and then recreate the database tables."""

    app = get_app()
    with app.app_context():
        database.drop_all()
        database.create_all()
        logging.info( 'Database tables dropped and recreated.' )
