import logging
from typing import Any, Iterable, Mapping

from nethermind.explorer_abi.registry.registry import SignatureRegistry
from nethermind.explorer_abi.types.decoding import DecodedCall, DecodedLog

from .event_decoders import decode_event_log
from .function_decoders import decode_function_input

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("explorer_abi").getChild("decoding")


class ExplorerDecoder:
    """

    Decodes transactions and logs returned by JSON-RPC with a shared signature registry.

    The decoder only holds a reference to an immutable registry.  When the ABI corpus changes, build a new
    registry and pass it to :meth:`swap_registry`.  Decodes that are already running keep using the registry
    they started with.

    """

    registry: SignatureRegistry
    """ Registry currently used for decoding """

    def __init__(self, registry: SignatureRegistry | None = None):
        self.registry = registry if registry is not None else SignatureRegistry.empty()

    def swap_registry(self, registry: SignatureRegistry) -> SignatureRegistry:
        """
        Replaces the registry used for new decodes.

        :return: The previous registry
        """
        previous, self.registry = self.registry, registry
        logger.info(
            f"Swapped signature registry: {registry.function_count} functions and {registry.event_count} events"
        )
        return previous

    def decode_transaction(self, tx: Mapping[str, Any]) -> DecodedCall | None:
        """
        Decodes the input of a transaction JSON dict

        :param tx: Transaction with an ``input`` (or ``data``) hex field
        """
        calldata = tx.get("input", tx.get("data"))
        if calldata is None:
            return None
        return decode_function_input(self.registry, calldata)

    def decode_event(self, log: Mapping[str, Any]) -> DecodedLog | None:
        """
        Decodes a log JSON dict

        :param log: Log with a ``topics`` list and a ``data`` hex field
        """
        return decode_event_log(self.registry, log.get("topics") or [], log.get("data") or "0x")

    def decode_logs(self, logs: Iterable[Mapping[str, Any]]) -> list[DecodedLog | None]:
        """Decodes a list of logs, returning None in place of every log that cannot be decoded"""
        registry = self.registry
        return [decode_event_log(registry, log.get("topics") or [], log.get("data") or "0x") for log in logs]
