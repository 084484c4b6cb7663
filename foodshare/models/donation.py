"""The model for the FoodShare API service: donations table.

Donations are created with status available and are never updated by this service.
"""
# pylint: disable=R0903
from datetime import datetime

from foodshare.flask_essentials import database

DONATION_STATUSES = ( 'available', 'claimed', 'completed', 'cancelled' )


class DonationModel( database.Model ):
    """A food donation offered for pickup."""

    __tablename__ = 'donations'
    donation_id = database.Column(
        database.Integer, primary_key=True,
        autoincrement=True, nullable=False
    )
    donor_id = database.Column( database.Integer, database.ForeignKey( 'users.user_id' ), nullable=False )
    food_type = database.Column( database.VARCHAR( 50 ), nullable=True, default='' )
    description = database.Column( database.Text, nullable=True, default=None )
    quantity = database.Column( database.VARCHAR( 50 ), nullable=True, default='' )
    pickup_date = database.Column( database.VARCHAR( 20 ), nullable=True, default='' )
    pickup_time = database.Column( database.VARCHAR( 20 ), nullable=True, default='' )
    pickup_address = database.Column( database.Text, nullable=True, default=None )
    status = database.Column(
        database.Enum( *DONATION_STATUSES, native_enum=False, name='donation_status' ),
        nullable=False, default='available'
    )
    created_at = database.Column( database.DateTime, nullable=False, default=datetime.utcnow )
