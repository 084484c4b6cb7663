"""Marshmallow schema module for the food donation payloads.

The front-end forms post camelCase names, e.g. businessName or individualPickupDate. The data_key on each field maps
those names to the snake_case attributes the controllers work with.
"""
# pylint: disable=too-few-public-methods
from marshmallow import EXCLUDE
from marshmallow import fields
from marshmallow import Schema
from marshmallow import validate


class BusinessDonationSchema( Schema ):
    """The payload for POST /api/business-donation."""

    class Meta:
        """Meta object for Marshmallow schema."""

        unknown = EXCLUDE

    business_name = fields.String( data_key='businessName', load_default='' )
    business_type = fields.String( data_key='businessType', load_default='' )
    contact_name = fields.String( data_key='contactName', load_default='' )
    email = fields.String( data_key='businessEmail', load_default='' )
    phone = fields.String( data_key='businessPhone', load_default='' )
    address = fields.String( data_key='businessAddress', load_default='' )
    food_type = fields.String( data_key='foodType', load_default='' )
    quantity = fields.String( data_key='foodQuantity', load_default='' )
    pickup_date = fields.String( data_key='pickupDate', load_default='' )
    pickup_time = fields.String( data_key='pickupTime', load_default='' )
    notes = fields.String( data_key='businessNotes', load_default='' )


class IndividualDonationSchema( Schema ):
    """The payload for POST /api/individual-donation.

    The form's donation type is the kind of food and its free text description is what gets stored as the quantity.
    """

    class Meta:
        """Meta object for Marshmallow schema."""

        unknown = EXCLUDE

    name = fields.String( data_key='individualName', load_default='' )
    email = fields.String( data_key='individualEmail', required=True, validate=validate.Length( min=1 ) )
    phone = fields.String( data_key='individualPhone', load_default='' )
    address = fields.String( data_key='individualAddress', load_default='' )
    food_type = fields.String( data_key='donationType', load_default='' )
    quantity = fields.String( data_key='individualFoodDescription', load_default='' )
    pickup_date = fields.String( data_key='individualPickupDate', load_default='' )
    pickup_time = fields.String( data_key='individualPickupTime', load_default='' )
    notes = fields.String( data_key='individualNotes', load_default='' )


class FlatFileDonationSchema( Schema ):
    """The payload for POST /api/donate, written as is to the delimited donation file."""

    class Meta:
        """Meta object for Marshmallow schema."""

        unknown = EXCLUDE

    donation_type = fields.String( data_key='donationType', load_default='' )
    name = fields.String( load_default='' )
    email = fields.String( load_default='' )
    phone = fields.String( load_default='' )
    address = fields.String( load_default='' )
    food_type = fields.String( data_key='foodType', load_default='' )
    quantity = fields.String( load_default='' )
    pickup_date = fields.String( data_key='pickupDate', load_default='' )
    pickup_time = fields.String( data_key='pickupTime', load_default='' )
    notes = fields.String( load_default='' )
