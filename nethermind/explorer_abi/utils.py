import binascii

from eth_utils import decode_hex


def hex_to_bytes(value: str | bytes | None) -> bytes | None:
    """
    Converts a hex string to bytes.  Accepts strings with or without a 0x prefix, and passes bytes through
    unchanged.  Returns None for odd-length or non-hex input rather than raising.

    >>> hex_to_bytes("0xa9059cbb")
    b'\\xa9\\x05\\x9c\\xbb'
    >>> hex_to_bytes("0x123") is None
    True
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        return None
    try:
        return decode_hex(value.strip())
    except (binascii.Error, ValueError):
        return None


def normalize_hex_key(value: str) -> str:
    """
    Lowercases a selector or topic and ensures the 0x prefix, so registry lookups are case-insensitive

    >>> normalize_hex_key("A9059CBB")
    '0xa9059cbb'
    """
    value = value.strip().lower()
    return value if value.startswith("0x") else f"0x{value}"


def pprint_list(write_array: list[str], term_width: int) -> list[str]:
    """
    Prints an array of strings to the console, wrapping lines with a max width of term_width

    :param write_array:
    :param term_width:
    :return:
    """
    current_line, output = "", []
    for write_val in write_array:
        if len(current_line) + len(write_val) + 1 > term_width:
            output.append(current_line)
            current_line = ""
        current_line += f"'{write_val}', "
    output.append(current_line)
    return output
