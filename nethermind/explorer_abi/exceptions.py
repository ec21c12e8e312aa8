class DecodingError(Exception):
    """

    Raised when issues occur while decoding ABI definitions, calldata, or event logs

    """


class AbiDefinitionError(DecodingError):
    """
    Raised when an ABI entry, parameter, or type string is malformed.  The registry builder catches this error
    and skips the offending entry, so it never reaches decode-time callers.

    Common causes:

        * ``tuple`` parameters without ``components``, or scalar parameters carrying ``components``
        * Unsupported types such as ``fixed128x18``, or invalid sizes such as ``uint7`` and ``bytes33``
        * Entries missing a ``name`` or carrying a non-list ``inputs`` field

    """


class InsufficientDataError(DecodingError):
    """
    Raised when the decoder attempts to read past the end of the data buffer, or when an offset or length word
    points outside of the buffer.  Caught per-parameter by the layout walk.
    """


class DecodeBudgetExceededError(DecodingError):
    """
    Raised when a decode visits more array elements than the input could honestly encode, which happens when
    offset words alias the same array.  The whole top-level parameter decodes to None.
    """


class RegistryError(Exception):
    """

    Raised when a persisted signature registry cannot be read or parsed

    """
