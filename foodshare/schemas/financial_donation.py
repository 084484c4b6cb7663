"""Marshmallow schema module for the financial donation payload."""
# pylint: disable=too-few-public-methods
from decimal import Decimal

from marshmallow import EXCLUDE
from marshmallow import fields
from marshmallow import pre_load
from marshmallow import Schema
from marshmallow import validate

from foodshare.models.financial_donation import DONATION_FREQUENCIES

# The form posts these as empty strings when nothing was picked, e.g. a custom amount left blank.
BLANK_AS_MISSING_KEYS = ( 'donationAmount', 'donationFrequency' )


class FinancialDonationRequestSchema( Schema ):
    """The payload for POST /api/financial-donation.

    The form is checked in the browser. The amount has to be a number and the frequency one of the values the
    financial_donations table accepts, otherwise nothing could be stored.
    """

    class Meta:
        """Meta object for Marshmallow schema."""

        unknown = EXCLUDE

    name = fields.String( data_key='donorName', load_default='' )
    email = fields.String( data_key='donorEmail', required=True, validate=validate.Length( min=1 ) )
    phone = fields.String( data_key='donorPhone', load_default='' )
    amount = fields.Decimal( data_key='donationAmount', places=2, load_default=Decimal( '0.00' ) )
    frequency = fields.String(
        data_key='donationFrequency', load_default='one-time', validate=validate.OneOf( DONATION_FREQUENCIES )
    )
    payment_method = fields.String( data_key='paymentMethod', load_default='' )
    comments = fields.String( load_default='' )
    is_anonymous = fields.Boolean( data_key='anonymous', load_default=False )

    @pre_load
    def drop_blank_choices( self, data, **kwargs ):  # pylint: disable=unused-argument
        """Treat a blank amount or frequency as not given, so the defaults apply.

        :param data: The raw payload.
        :return: The payload without the blank keys.
        """

        if not isinstance( data, dict ):
            return data
        return {
            key: value for key, value in data.items()
            if not ( key in BLANK_AS_MISSING_KEYS and ( value is None or str( value ).strip() == '' ) )
        }
