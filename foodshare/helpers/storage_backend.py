"""The storage capability shared by the relational and the file backends.

Records cross the backend boundary as plain dictionaries. A user dictionary carries user_id, user_type, name, email,
phone, address, password_hash and created_at. Failures are raised as StorageUnavailableError when the backend cannot
be reached, and as StorageWriteError when it was reached but could not read or persist the record.
"""


class StorageBackend:
    """Base class for the storage backends."""

    name = None

    def is_available( self ):
        """Return True if the backend can currently be reached."""
        raise NotImplementedError

    def find_user_by_email( self, email ):
        """Return the user dictionary for the email, or None."""
        raise NotImplementedError

    def add_user( self, user ):
        """Persist a new user and return it with its generated user_id."""
        raise NotImplementedError

    def find_or_create_donor( self, name, email, phone, address ):
        """Return the user_id for the email, creating a donor with a placeholder password hash if needed."""
        raise NotImplementedError

    def upsert_donor_profile( self, donor_id, business_name, business_type ):
        """Create or replace the business details of a donor."""
        raise NotImplementedError

    def add_donation( self, donor_id, donation ):
        """Persist a food donation for the donor and return its ID.

        The donation dictionary carries donation_type, food_type, quantity, pickup_date, pickup_time,
        pickup_address and description.
        """
        raise NotImplementedError

    def add_financial_donation( self, donor_id, financial_donation ):
        """Persist a financial donation for the donor and return its ID.

        The dictionary carries amount, frequency, payment_method, is_anonymous and comments.
        """
        raise NotImplementedError
