import logging

from eth_utils import encode_hex

from nethermind.explorer_abi.registry.registry import SignatureRegistry
from nethermind.explorer_abi.types.abi import FunctionSignature
from nethermind.explorer_abi.types.abi_types import TupleComponent
from nethermind.explorer_abi.types.decoding import DecodedCall
from nethermind.explorer_abi.utils import hex_to_bytes

from .cursor import AbiCursor
from .layout import decode_parameters

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("explorer_abi").getChild("decoding")

SELECTOR_SIZE = 4


def decode_function_calldata(function: FunctionSignature, calldata: bytes) -> DecodedCall:
    """
    Decodes the arguments of a call to a known function.

    :param function: Signature matched from the calldata selector
    :param calldata: Calldata bytes including the 4 byte selector
    """
    fields = [TupleComponent(p.name, p.type, p.abi_type) for p in function.parameters]
    params = decode_parameters(fields, AbiCursor(calldata[SELECTOR_SIZE:]))

    decoded = DecodedCall(
        name=function.name,
        signature=function.signature,
        selector=function.selector,
        params=tuple(params),
        abi_name=function.abi_name,
    )
    if not decoded.fully_decoded:
        logger.debug(f"Partially decoded {function.signature} from calldata {encode_hex(calldata)}")
    return decoded


def decode_function_input(registry: SignatureRegistry, calldata: str | bytes) -> DecodedCall | None:
    """
    Decodes transaction input using the function signatures in the registry.

    Returns None when the calldata is not hex, is shorter than a selector, or its selector is not registered.
    Truncated argument data never raises.  Parameters that do not fit are returned with a None value.

    :param registry: Signature registry to match the selector against
    :param calldata: 0x-prefixed hex calldata
    """
    data = hex_to_bytes(calldata)
    if data is None:
        logger.debug(f"Calldata {str(calldata)[:18]}... is not valid hex")
        return None

    if len(data) < SELECTOR_SIZE:
        return None

    function = registry.get_function(encode_hex(data[:SELECTOR_SIZE]))
    if function is None:
        return None

    return decode_function_calldata(function, data)
