from typing import Any, Sequence

from eth_typing import ABIEvent, ABIFunction

from nethermind.explorer_abi.types.abi import Parameter


def canonical_signature(name: str, parameters: Sequence[Parameter]) -> str:
    """
    Converts a name and parameter list to the canonical signature that is hashed into selectors and topics.
    Tuples are expanded into their component types, so two structs sharing a name but not a layout never
    share a signature.

    >>> from nethermind.explorer_abi.types.abi import Parameter
    >>> canonical_signature("transfer", [Parameter("to", "address"), Parameter("amount", "uint256")])
    'transfer(address,uint256)'
    >>> canonical_signature(
    ...     "submit",
    ...     [Parameter("orders", "tuple[]", components=(Parameter("maker", "address"), Parameter("id", "uint64")))],
    ... )
    'submit((address,uint64)[])'
    """
    return f"{name}({','.join(p.canonical_type for p in parameters)})"


def filter_functions(contract_abi: Sequence[Any]) -> list[ABIFunction]:
    """Filters out all non-function ABI entries"""
    return [abi for abi in contract_abi if isinstance(abi, dict) and abi.get("type", "function") == "function"]


def filter_events(contract_abi: Sequence[Any]) -> list[ABIEvent]:
    """Filters out all non-event ABI entries"""
    return [abi for abi in contract_abi if isinstance(abi, dict) and abi.get("type") == "event"]
