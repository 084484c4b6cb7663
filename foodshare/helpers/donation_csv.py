"""Read and append the delimited donation files used by the file backend.

Every field is quoted and an embedded double quote is written as two double quotes, so a row read back with the
csv module returns the original strings. The header is written once, when the file is created.
"""
import csv
import os

DONATION_CSV_FIELDS = [
    'id', 'donationType', 'name', 'email', 'phone', 'address', 'foodType', 'quantity', 'pickupDate', 'pickupTime',
    'notes', 'timestamp'
]

FINANCIAL_DONATION_CSV_FIELDS = [
    'id', 'donorId', 'name', 'email', 'amount', 'frequency', 'paymentMethod', 'isAnonymous', 'comments', 'timestamp'
]


def ensure_csv_file( file_path, field_names ):
    """Create the file with its header row if it does not exist yet."""

    if os.path.exists( file_path ):
        return
    os.makedirs( os.path.dirname( file_path ) or '.', exist_ok=True )
    with open( file_path, 'w', newline='', encoding='utf-8' ) as csv_file:
        writer = csv.writer( csv_file, lineterminator='\n' )
        writer.writerow( field_names )


def append_csv_row( file_path, field_names, row ):
    """Append one row, creating the file and header first if needed.

    :param str file_path: The CSV file.
    :param list field_names: The header, which fixes the column order.
    :param dict row: Values keyed by field name. Missing values are written as empty strings, None included.
    :return: The row as written.
    """

    ensure_csv_file( file_path, field_names )
    written = { field_name: format_csv_value( row.get( field_name ) ) for field_name in field_names }
    with open( file_path, 'a', newline='', encoding='utf-8' ) as csv_file:
        writer = csv.DictWriter( csv_file, fieldnames=field_names, quoting=csv.QUOTE_ALL, lineterminator='\n' )
        writer.writerow( written )
    return written


def read_csv_rows( file_path ):
    """Return every data row of the file as a list of dictionaries keyed by the header."""

    if not os.path.exists( file_path ):
        return []
    with open( file_path, 'r', newline='', encoding='utf-8' ) as csv_file:
        return list( csv.DictReader( csv_file ) )


def format_csv_value( value ):
    """Render a value the way the file stores it."""

    if value is None:
        return ''
    if isinstance( value, bool ):
        return 'true' if value else 'false'
    return str( value )
