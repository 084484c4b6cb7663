"""The model for the FoodShare API service: financial_donations table.

The amount is recorded only; no payment is processed.
"""
# pylint: disable=R0903
from datetime import datetime

from foodshare.flask_essentials import database

DONATION_FREQUENCIES = ( 'one-time', 'monthly', 'quarterly', 'annually' )


class FinancialDonationModel( database.Model ):
    """A pledged financial donation."""

    __tablename__ = 'financial_donations'
    financial_donation_id = database.Column(
        database.Integer, primary_key=True,
        autoincrement=True, nullable=False
    )
    donor_id = database.Column( database.Integer, database.ForeignKey( 'users.user_id' ), nullable=False )
    amount = database.Column( database.Numeric( 10, 2 ), nullable=False, default=0 )
    donation_frequency = database.Column(
        database.Enum( *DONATION_FREQUENCIES, native_enum=False, name='donation_frequency' ),
        nullable=False, default='one-time'
    )
    payment_method = database.Column( database.VARCHAR( 50 ), nullable=True, default='' )
    is_anonymous = database.Column( database.Boolean, nullable=False, default=False )
    comments = database.Column( database.Text, nullable=True, default=None )
    created_at = database.Column( database.DateTime, nullable=False, default=datetime.utcnow )
