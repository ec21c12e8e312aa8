from .builder import (
    RegistryBuilder,
    build_registry,
    event_signature_from_abi,
    function_signature_from_abi,
)
from .registry import SignatureRegistry
from .storage import load_corpus_directory, load_registry, save_registry

__all__ = [
    "RegistryBuilder",
    "SignatureRegistry",
    "build_registry",
    "event_signature_from_abi",
    "function_signature_from_abi",
    "load_corpus_directory",
    "load_registry",
    "save_registry",
]
