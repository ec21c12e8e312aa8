from eth_utils import encode_hex

from nethermind.explorer_abi.types.abi_types import (
    AbiType,
    AddressType,
    ArrayType,
    BoolType,
    BytesType,
    FixedBytesType,
    IntType,
    StringType,
    TupleType,
    UintType,
)


def format_word(abi_type: AbiType, word: bytes) -> str:
    """
    Formats a single 32 byte head slot for a scalar type.

    * address: lowercase hex of the last 20 bytes
    * uintN: decimal
    * intN: decimal, two's complement
    * bool: ``true`` if the slot is nonzero
    * bytesN: hex of the first N bytes
    """
    match abi_type:
        case AddressType():
            return encode_hex(word[-20:])
        case UintType():
            return str(int.from_bytes(word, "big"))
        case IntType():
            return str(int.from_bytes(word, "big", signed=True))
        case BoolType():
            return "true" if any(word) else "false"
        case FixedBytesType(size=size):
            return encode_hex(word[:size])
        case _:
            raise TypeError(f"Cannot format {abi_type} from a single word")


def format_bytes(abi_type: BytesType | StringType, payload: bytes) -> str:
    """Formats the payload of a dynamic bytes or string value"""
    if isinstance(abi_type, StringType):
        return payload.decode("utf-8", errors="replace")
    return encode_hex(payload)


def format_topic(abi_type: AbiType, topic: bytes) -> str:
    """
    Formats an indexed event parameter.  Dynamic and compound values are stored in the log as the keccak hash
    of their encoding, so the raw topic is returned for those.
    """
    match abi_type:
        case BytesType() | StringType() | ArrayType() | TupleType():
            return encode_hex(topic)
        case _ if len(topic) != 32:
            return encode_hex(topic)
        case _:
            return format_word(abi_type, topic)


def summarize(values: list[str | None], brackets: str) -> str | None:
    """
    Joins component values of a tuple ``()`` or array ``[]`` into a single display value.  Returns None when
    any component could not be decoded.

    >>> summarize(["1", "0xab"], "()")
    '(1,0xab)'
    """
    if any(v is None for v in values):
        return None
    return f"{brackets[0]}{','.join(values)}{brackets[1]}"  # type: ignore[arg-type]
