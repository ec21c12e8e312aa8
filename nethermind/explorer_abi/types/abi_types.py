"""
Closed set of ABI type variants used by the decoder.

Parameter type strings are parsed once into these variants, so the layout walk in
:mod:`nethermind.explorer_abi.decoding.layout` can ``match`` on a fixed set of cases instead of
switching on string prefixes.
"""
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple, Union

from eth_abi.exceptions import ParseError
from eth_abi.grammar import BasicType, parse

from nethermind.explorer_abi.exceptions import AbiDefinitionError

if TYPE_CHECKING:
    from nethermind.explorer_abi.types.abi import Parameter

WORD_SIZE = 32

_ARRAY_DIM_RE = re.compile(r"\[(\d*)\]")


@dataclass(frozen=True)
class AddressType:
    """20 byte address, right aligned in its slot"""

    def __str__(self) -> str:
        return "address"


@dataclass(frozen=True)
class UintType:
    """Unsigned integer of ``bits`` width"""

    bits: int = 256

    def __str__(self) -> str:
        return f"uint{self.bits}"


@dataclass(frozen=True)
class IntType:
    """Two's complement signed integer of ``bits`` width"""

    bits: int = 256

    def __str__(self) -> str:
        return f"int{self.bits}"


@dataclass(frozen=True)
class BoolType:
    def __str__(self) -> str:
        return "bool"


@dataclass(frozen=True)
class FixedBytesType:
    """bytes1 ... bytes32, left aligned in its slot"""

    size: int

    def __str__(self) -> str:
        return f"bytes{self.size}"


@dataclass(frozen=True)
class BytesType:
    def __str__(self) -> str:
        return "bytes"


@dataclass(frozen=True)
class StringType:
    def __str__(self) -> str:
        return "string"


@dataclass(frozen=True)
class ArrayType:
    """Array of ``item``.  ``length`` is None for dynamically sized arrays"""

    item: "AbiType"
    length: int | None = None

    def __str__(self) -> str:
        return f"{self.item}[{'' if self.length is None else self.length}]"


class TupleComponent(NamedTuple):
    """Named member of a tuple, keeping the declared type string for display"""

    name: str
    type: str
    abi_type: "AbiType"


@dataclass(frozen=True)
class TupleType:
    components: tuple[TupleComponent, ...]

    def __str__(self) -> str:
        return f"({','.join(str(c.abi_type) for c in self.components)})"


AbiType = Union[
    AddressType,
    UintType,
    IntType,
    BoolType,
    FixedBytesType,
    BytesType,
    StringType,
    ArrayType,
    TupleType,
]


def is_dynamic(abi_type: AbiType) -> bool:
    """
    Returns True if the type is encoded in the tail of its enclosing structure and referenced from the head by an
    offset word.

    >>> is_dynamic(ArrayType(UintType(256), 2))
    False
    >>> is_dynamic(ArrayType(StringType(), 2))
    True
    """
    match abi_type:
        case BytesType() | StringType():
            return True
        case ArrayType(item=item, length=length):
            return length is None or is_dynamic(item)
        case TupleType(components=components):
            return any(is_dynamic(c.abi_type) for c in components)
        case _:
            return False


def head_size(abi_type: AbiType) -> int:
    """
    Number of bytes a value of this type occupies in the head of its enclosing structure.  Dynamic values only
    occupy their offset word.  Static tuples and static fixed-size arrays are laid out in place.
    """
    if is_dynamic(abi_type):
        return WORD_SIZE

    match abi_type:
        case TupleType(components=components):
            return sum(head_size(c.abi_type) for c in components)
        case ArrayType(item=item, length=length):
            return head_size(item) * (length or 0)
        case _:
            return WORD_SIZE


def element_type_str(type_str: str) -> str:
    """
    Strips the outermost array dimension from a declared type string

    >>> element_type_str("tuple[2][]")
    'tuple[2]'
    >>> element_type_str("uint256[]")
    'uint256'
    """
    index = type_str.rfind("[")
    if index == -1:
        return type_str
    return type_str[:index]


def _wrap_array_dims(abi_type: AbiType, dims: list[int | None]) -> AbiType:
    for length in dims:
        abi_type = ArrayType(abi_type, length)
    return abi_type


def _basic_to_abi_type(basic: BasicType, type_str: str) -> AbiType:
    base, sub = basic.base, basic.sub
    match base:
        case "address":
            return AddressType()
        case "bool":
            return BoolType()
        case "string":
            return StringType()
        case "function":
            return FixedBytesType(24)
        case "uint" | "int":
            bits = 256 if sub is None else sub
            if not isinstance(bits, int) or bits % 8 != 0 or not 8 <= bits <= 256:
                raise AbiDefinitionError(f"Invalid integer size in ABI type {type_str}")
            return UintType(bits) if base == "uint" else IntType(bits)
        case "bytes":
            if sub is None:
                return BytesType()
            if not isinstance(sub, int) or not 1 <= sub <= 32:
                raise AbiDefinitionError(f"Invalid size for fixed bytes type {type_str}")
            return FixedBytesType(sub)
        case _:
            raise AbiDefinitionError(f"Unsupported ABI type {type_str}")


def parse_type_str(type_str: str) -> AbiType:
    """
    Parses a non-tuple ABI type string into its AbiType variant.

    :param type_str: ABI type string, ie ``uint256``, ``bytes32[]``, ``address[2][]``
    """
    try:
        parsed = parse(type_str)
    except (ParseError, TypeError) as e:
        raise AbiDefinitionError(f"Could not parse ABI type {type_str!r}") from e

    if not isinstance(parsed, BasicType):
        raise AbiDefinitionError(f"Tuple types must be declared with components, got {type_str}")

    dims: list[int | None] = [dim[0] if dim else None for dim in (parsed.arrlist or ())]
    return _wrap_array_dims(_basic_to_abi_type(parsed, type_str), dims)


def parse_parameter_type(parameter: "Parameter") -> AbiType:
    """
    Builds the AbiType variant for a parameter, recursing into tuple components.

    Tuple dimensions are taken from the suffix of the declared type (``tuple``, ``tuple[]``, ``tuple[3][]``),
    innermost dimension first.
    """
    if not parameter.type.startswith("tuple"):
        return parse_type_str(parameter.type)

    suffix = parameter.type[5:]
    dims = _ARRAY_DIM_RE.findall(suffix)
    if "".join(f"[{d}]" for d in dims) != suffix:
        raise AbiDefinitionError(f"Invalid tuple array suffix in ABI type {parameter.type}")

    tuple_type = TupleType(
        tuple(TupleComponent(c.name, c.type, parse_parameter_type(c)) for c in parameter.components)
    )
    return _wrap_array_dims(tuple_type, [int(d) if d else None for d in dims])
