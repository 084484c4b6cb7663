"""Salted one-way password hashing with bcrypt."""
import bcrypt

BCRYPT_ROUNDS = 10


def hash_password( password ):
    """Hash a plain text password with a fresh salt.

    :param str password: The plain text password.
    :return: The bcrypt hash as a string.
    """

    return bcrypt.hashpw( password.encode( 'utf-8' ), bcrypt.gensalt( rounds=BCRYPT_ROUNDS ) ).decode( 'utf-8' )


def check_password( password, password_hash ):
    """Compare a plain text password against a stored hash.

    A stored value that is not a bcrypt hash, e.g. the placeholder on implicitly created donors, never matches.

    :param str password: The plain text password.
    :param str password_hash: The stored hash.
    :return: True if the password matches.
    """

    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw( password.encode( 'utf-8' ), password_hash.encode( 'utf-8' ) )
    except ValueError:
        return False
