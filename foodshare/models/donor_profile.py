"""The model for the FoodShare API service: donor_profiles table.

One profile per donor, keyed on donor_id, holding the business details sent with a business donation.
"""
# pylint: disable=R0903
from foodshare.flask_essentials import database


class DonorProfileModel( database.Model ):
    """Business details of a donor."""

    __tablename__ = 'donor_profiles'
    profile_id = database.Column(
        database.Integer, primary_key=True,
        autoincrement=True, nullable=False
    )
    donor_id = database.Column(
        database.Integer, database.ForeignKey( 'users.user_id' ), nullable=False, unique=True
    )
    business_name = database.Column( database.VARCHAR( 100 ), nullable=True, default=None )
    business_type = database.Column( database.VARCHAR( 50 ), nullable=True, default=None )
