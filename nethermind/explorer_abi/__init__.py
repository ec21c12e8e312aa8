from nethermind.explorer_abi.decoding import ExplorerDecoder, decode_event_log, decode_function_input
from nethermind.explorer_abi.registry import (
    RegistryBuilder,
    SignatureRegistry,
    build_registry,
    load_corpus_directory,
    load_registry,
    save_registry,
)

__all__ = [
    "ExplorerDecoder",
    "RegistryBuilder",
    "SignatureRegistry",
    "build_registry",
    "decode_event_log",
    "decode_function_input",
    "load_corpus_directory",
    "load_registry",
    "save_registry",
]
