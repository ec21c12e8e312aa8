"""
Token transfer extraction from decoded transaction logs.

Used to summarise the ERC-20 and Interchain Token Transfer (ICTT) activity of a transaction in the explorer.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

from nethermind.explorer_abi.decoding.dispatcher import ExplorerDecoder
from nethermind.explorer_abi.types.decoding import DecodedParam

# Disabling naming check that wants enums to use UPPER_CASE
# pylint: disable=invalid-name

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("explorer_abi").getChild("transfers")

ERC20_TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


class CrossChainTransferType(Enum):
    """ICTT events emitted by token home and remote contracts when tokens leave the chain"""

    TokensSent = "TokensSent"
    TokensAndCallSent = "TokensAndCallSent"
    TokensRouted = "TokensRouted"
    TokensAndCallRouted = "TokensAndCallRouted"


# Topics of the ICTT events, emitted by ERC20TokenHome, NativeTokenHome and the token remotes
CROSS_CHAIN_TOPICS: dict[str, CrossChainTransferType] = {
    "0x93f19bf1ec58a15dc643b37e7e18a1c13e85e06cd11929e283154691ace9fb52": CrossChainTransferType.TokensSent,
    "0x5d76dff81bf773b908b050fa113d39f7d8135bb4175398f313ea19cd3a1a0b16": CrossChainTransferType.TokensAndCallSent,
    "0x825080857c76cef4a1629c0705a7f8b4ef0282ddcafde0b6715c4fb34b68aaf0": CrossChainTransferType.TokensRouted,
    "0x42eff9005856e3c586b096d67211a566dc926052119fd7cc08023c70937ecb30": CrossChainTransferType.TokensAndCallRouted,
}


@dataclass(frozen=True)
class ERC20Transfer:
    from_address: str
    to_address: str
    value: str
    token_address: str


@dataclass(frozen=True)
class CrossChainTransfer:
    type: CrossChainTransferType
    teleporter_message_id: str
    sender: str
    destination_blockchain_id: str
    destination_token_transferrer_address: str
    recipient: str
    amount: str
    contract_address: str


def _param_value(param: DecodedParam | None) -> str:
    if param is None or param.value is None:
        return ""
    return param.value


def _component_value(param: DecodedParam | None, *names: str) -> str:
    """Returns the value of the first tuple component matching one of ``names``"""
    if param is None or not param.components:
        return ""
    for name in names:
        for component in param.components:
            if component.name == name:
                return _param_value(component)
    return ""


def extract_erc20_transfers(logs: Iterable[Mapping[str, Any]], decoder: ExplorerDecoder) -> list[ERC20Transfer]:
    """
    Extracts ERC-20 transfers from transaction logs.  ERC-721 transfers share the topic, but index the token ID
    as a third topic, so they are returned with the token ID as the value.

    :param logs: JSON-RPC log dicts with ``topics``, ``data`` and ``address``
    :param decoder: Decoder holding a registry with the ``Transfer`` event
    """
    transfers = []
    for log in logs:
        topics = log.get("topics") or []
        if len(topics) < 3 or str(topics[0]).lower() != ERC20_TRANSFER_TOPIC:
            continue

        decoded = decoder.decode_event(log)
        if decoded is None or decoded.name != "Transfer":
            logger.debug(f"Skipping undecodable Transfer log from {log.get('address')}")
            continue

        from_param = decoded.get_param("from")
        to_param = decoded.get_param("to")
        value_param = decoded.get_param("value") or decoded.get_param("tokenId")
        if from_param is None or to_param is None or value_param is None:
            logger.debug(f"Skipping Transfer log from {log.get('address')} without from, to and value params")
            continue

        transfers.append(
            ERC20Transfer(
                from_address=_param_value(from_param),
                to_address=_param_value(to_param),
                value=_param_value(value_param) or "0",
                token_address=str(log.get("address", "")).lower(),
            )
        )

    return transfers


def extract_cross_chain_transfers(
    logs: Iterable[Mapping[str, Any]],
    decoder: ExplorerDecoder,
) -> list[CrossChainTransfer]:
    """
    Extracts outgoing ICTT transfers from transaction logs.  Logs are matched on topic0 against
    ``CROSS_CHAIN_TOPICS``, so unrelated events that reuse an ICTT event name are ignored.

    The teleporter message ID and sender are read from the raw topics, and the destination is read from the
    ``input`` tuple of the decoded event.

    :param logs: JSON-RPC log dicts with ``topics``, ``data`` and ``address``
    :param decoder: Decoder holding a registry with the ICTT events
    """
    transfers = []
    for log in logs:
        topics = log.get("topics") or []
        transfer_type = CROSS_CHAIN_TOPICS.get(str(topics[0]).lower()) if topics else None
        if transfer_type is None:
            continue

        decoded = decoder.decode_event(log)
        if decoded is None:
            logger.debug(f"Skipping undecodable {transfer_type.value} log from {log.get('address')}")
            continue

        sender_topic = str(topics[2]) if len(topics) > 2 else ""
        input_param = decoded.get_param("input")

        transfers.append(
            CrossChainTransfer(
                type=transfer_type,
                teleporter_message_id=str(topics[1]) if len(topics) > 1 else "",
                sender=f"0x{sender_topic[-40:].lower()}" if sender_topic else "",
                destination_blockchain_id=_component_value(input_param, "destinationBlockchainID"),
                destination_token_transferrer_address=_component_value(
                    input_param, "destinationTokenTransferrerAddress"
                ),
                recipient=_component_value(input_param, "recipient", "recipientContract"),
                amount=_param_value(decoded.get_param("amount")) or "0",
                contract_address=str(log.get("address", "")).lower(),
            )
        )

    return transfers
