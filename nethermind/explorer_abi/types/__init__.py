from .abi import EventSignature, FunctionSignature, Parameter
from .abi_types import (
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
)
from .decoding import DecodedCall, DecodedLog, DecodedParam

__all__ = [
    "AbiType",
    "AddressType",
    "ArrayType",
    "BoolType",
    "BytesType",
    "DecodedCall",
    "DecodedLog",
    "DecodedParam",
    "EventSignature",
    "FixedBytesType",
    "FunctionSignature",
    "IntType",
    "Parameter",
    "StringType",
    "TupleComponent",
    "TupleType",
    "UintType",
]
