from .cursor import AbiCursor
from .dispatcher import ExplorerDecoder
from .event_decoders import decode_event_data, decode_event_log
from .function_decoders import decode_function_calldata, decode_function_input
from .layout import decode_parameters, decode_value

__all__ = [
    "AbiCursor",
    "ExplorerDecoder",
    "decode_event_data",
    "decode_event_log",
    "decode_function_calldata",
    "decode_function_input",
    "decode_parameters",
    "decode_value",
]
