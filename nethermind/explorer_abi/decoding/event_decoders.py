import logging
from typing import Sequence

from eth_utils import encode_hex

from nethermind.explorer_abi.registry.registry import SignatureRegistry
from nethermind.explorer_abi.types.abi import EventSignature
from nethermind.explorer_abi.types.abi_types import TupleComponent
from nethermind.explorer_abi.types.decoding import DecodedLog, DecodedParam
from nethermind.explorer_abi.utils import hex_to_bytes

from .cursor import AbiCursor
from .formatters import format_topic
from .layout import decode_parameters

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("explorer_abi").getChild("decoding")


def decode_event_data(event: EventSignature, topics: Sequence[bytes | None], data: bytes) -> DecodedLog:
    """
    Decodes a log for a known event.

    Indexed parameters consume ``topics[1:]`` in declaration order.  Non-indexed parameters are decoded from the
    data with the head/tail layout.  Results are returned in declaration order.

    :param event: Signature matched from topics[0]
    :param topics: Topic bytes including the signature topic.  None entries mark topics that were not valid hex
    :param data: Log data bytes
    """
    data_fields = [TupleComponent(p.name, p.type, p.abi_type) for p in event.parameters if not p.indexed]
    decoded_data = iter(decode_parameters(data_fields, AbiCursor(data)))
    indexed_topics = iter(topics[1:])

    params: list[DecodedParam] = []
    for param in event.parameters:
        if not param.indexed:
            params.append(next(decoded_data))
            continue

        topic = next(indexed_topics, None)
        params.append(
            DecodedParam(
                name=param.name,
                type=param.type,
                value=None if topic is None else format_topic(param.abi_type, topic),
                indexed=True,
            )
        )

    decoded = DecodedLog(
        name=event.name,
        signature=event.signature,
        topic=event.topic,
        params=tuple(params),
        abi_name=event.abi_name,
    )
    if not decoded.fully_decoded:
        logger.debug(
            f"Partially decoded event {event.signature} with {len(topics)} topics and {len(data)} data bytes"
        )
    return decoded


def decode_event_log(
    registry: SignatureRegistry,
    topics: Sequence[str | bytes],
    data: str | bytes = "0x",
) -> DecodedLog | None:
    """
    Decodes an event log using the event signatures in the registry.

    The event variant is selected by the number of indexed topics, falling back to the first registered variant.
    Returns None if there are no topics, or topics[0] is not registered.

    :param registry: Signature registry to match topics[0] against
    :param topics: 0x-prefixed hex topics, starting with the event signature topic
    :param data: 0x-prefixed hex log data
    """
    if not topics:
        return None

    topic_bytes = [hex_to_bytes(t) for t in topics]
    if topic_bytes[0] is None:
        return None

    event = registry.select_event_variant(encode_hex(topic_bytes[0]), len(topics) - 1)
    if event is None:
        return None

    data_bytes = hex_to_bytes(data)
    if data_bytes is None:
        logger.debug(f"Log data for {event.signature} is not valid hex.  Decoding topics only")
        data_bytes = b""

    return decode_event_data(event, topic_bytes, data_bytes)
