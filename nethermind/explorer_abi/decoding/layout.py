"""
Head/tail walk of ABI encoded data.

A parameter list (function inputs, non-indexed event fields, tuple components, array elements) is a head of
consecutive slots followed by a tail.  Static values sit in the head, dynamic values are referenced from the
head by an offset word relative to the start of the enclosing structure.

Every decode call returns the number of head bytes it consumed, so sibling parameters following a dynamic
value continue reading at the correct slot.
"""
import logging
from typing import Sequence

from nethermind.explorer_abi.exceptions import DecodeBudgetExceededError, DecodingError, InsufficientDataError
from nethermind.explorer_abi.types.abi_types import (
    WORD_SIZE,
    AbiType,
    AddressType,
    ArrayType,
    BoolType,
    BytesType,
    FixedBytesType,
    IntType,
    StringType,
    TupleComponent,
    TupleType,
    UintType,
    element_type_str,
    head_size,
    is_dynamic,
)
from nethermind.explorer_abi.types.decoding import DecodedParam

from .cursor import AbiCursor
from .formatters import format_bytes, format_word, summarize

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("explorer_abi").getChild("decoding")


def decode_value(name: str, type_str: str, abi_type: AbiType, cursor: AbiCursor) -> tuple[DecodedParam, int]:
    """
    Decodes the value whose head slot starts at the cursor position.

    :param name: Parameter name used in the output
    :param type_str: Declared type string used in the output
    :param abi_type: Parsed type of the parameter
    :param cursor: Cursor positioned at the parameter's head slot, based at the enclosing structure
    :return: (decoded parameter, head bytes consumed)
    """
    if is_dynamic(abi_type):
        target = cursor.enter(cursor.read_uint())
        return _decode_in_place(name, type_str, abi_type, target), WORD_SIZE

    return _decode_in_place(name, type_str, abi_type, cursor), head_size(abi_type)


def decode_parameters(
    fields: Sequence[TupleComponent],
    cursor: AbiCursor,
    nested: bool = False,
) -> list[DecodedParam]:
    """
    Walks a parameter list starting at the cursor position.  Parameters that cannot be decoded are returned with
    a None value, and the walk continues with the next head slot.

    :param fields: (name, declared type, parsed type) for each parameter, in declaration order
    :param cursor: Cursor positioned at, and based on, the first head slot
    :param nested: True for tuple components and array elements.  Exhausting the decode budget inside a nested
        list fails the enclosing top-level parameter instead of a single element
    """
    decoded: list[DecodedParam] = []
    for field in fields:
        try:
            param, consumed = decode_value(field.name, field.type, field.abi_type, cursor)
        except DecodingError as e:
            if nested and isinstance(e, DecodeBudgetExceededError):
                raise
            logger.debug(f"Could not decode {field.type} {field.name!r} at index {cursor.position}: {e}")
            param, consumed = DecodedParam(name=field.name, type=field.type, value=None), head_size(field.abi_type)

        decoded.append(param)
        cursor = cursor.advance(consumed)

    return decoded


def _decode_in_place(name: str, type_str: str, abi_type: AbiType, cursor: AbiCursor) -> DecodedParam:
    match abi_type:
        case AddressType() | UintType() | IntType() | BoolType() | FixedBytesType():
            return DecodedParam(name=name, type=type_str, value=format_word(abi_type, cursor.read_word()))

        case BytesType() | StringType():
            length = cursor.read_uint()
            payload = cursor.read_bytes(cursor.position + WORD_SIZE, length)
            cursor.spend(-(-length // WORD_SIZE))
            return DecodedParam(name=name, type=type_str, value=format_bytes(abi_type, payload))

        case TupleType(components=components):
            values = decode_parameters(components, cursor.rebase(), nested=True)
            return DecodedParam(
                name=name,
                type=type_str,
                value=summarize([v.value for v in values], "()"),
                components=tuple(values),
            )

        case ArrayType(item=item, length=length):
            if length is None:
                count = cursor.read_uint()
                cursor = cursor.advance(WORD_SIZE)
            else:
                count = length

            # Elements are laid out back to back after the count, so larger counts cannot be valid
            if count * max(head_size(item), 1) > cursor.remaining:
                raise InsufficientDataError(
                    f"Array of {count} {item} elements does not fit in the remaining {cursor.remaining} bytes"
                )
            cursor.spend(count)

            item_type_str = element_type_str(type_str)
            elements = [TupleComponent(f"{name}[{i}]", item_type_str, item) for i in range(count)]
            values = decode_parameters(elements, cursor.rebase(), nested=True)
            return DecodedParam(
                name=name,
                type=type_str,
                value=summarize([v.value for v in values], "[]"),
                components=tuple(values),
            )

        case _:
            raise DecodingError(f"Unsupported ABI type {abi_type}")
