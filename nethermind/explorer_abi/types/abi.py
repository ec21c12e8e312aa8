from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from nethermind.explorer_abi.exceptions import AbiDefinitionError

from .abi_types import AbiType, parse_parameter_type


@dataclass(frozen=True)
class Parameter:
    """
    One input of a function, one field of an event, or one component of a tuple.

    ``indexed`` is only meaningful for top-level event parameters, and ``components`` is only present for
    ``tuple``, ``tuple[]`` and ``tuple[k]`` types.
    """

    name: str
    type: str
    indexed: bool = False
    components: tuple["Parameter", ...] = field(default=())

    def __post_init__(self):
        if not isinstance(self.type, str) or not self.type:
            raise AbiDefinitionError(f"Parameter {self.name!r} has an invalid type: {self.type!r}")

        if self.type.startswith("tuple"):
            if not self.components:
                raise AbiDefinitionError(f"Tuple parameter {self.name!r} must define at least one component")
        elif self.components:
            raise AbiDefinitionError(f"Parameter {self.name!r} of type {self.type} cannot define components")

    @classmethod
    def from_abi(cls, abi_param: Any, event_param: bool = False) -> "Parameter":
        """
        Builds a Parameter from an ABI JSON parameter dict.

        :param abi_param: ``{"name": ..., "type": ..., "indexed": ..., "components": [...]}``
        :param event_param: If True, the ``indexed`` flag is read.  Tuple components never carry it.
        """
        if not isinstance(abi_param, dict):
            raise AbiDefinitionError(f"ABI parameter must be a dict, got {type(abi_param).__name__}")

        components = abi_param.get("components") or []
        if not isinstance(components, list):
            raise AbiDefinitionError(f"Components of parameter {abi_param.get('name')!r} must be a list")

        return cls(
            name=abi_param.get("name") or "",
            type=abi_param.get("type"),  # type: ignore[arg-type]
            indexed=bool(abi_param.get("indexed", False)) if event_param else False,
            components=tuple(cls.from_abi(c) for c in components),
        )

    @cached_property
    def abi_type(self) -> AbiType:
        """Parsed type variant used by the decoder"""
        return parse_parameter_type(self)

    @property
    def canonical_type(self) -> str:
        """
        Type with tuples recursively expanded, as used in canonical signatures.

        >>> Parameter("p", "tuple[]", components=(Parameter("a", "address"), Parameter("b", "uint256"))).canonical_type
        '(address,uint256)[]'
        """
        if not self.type.startswith("tuple"):
            return self.type
        return f"({','.join(c.canonical_type for c in self.components)}){self.type[5:]}"

    def to_dict(self) -> dict[str, Any]:
        """Returns the ABI JSON representation of the parameter"""
        output: dict[str, Any] = {"name": self.name, "type": self.type}
        if self.indexed:
            output["indexed"] = True
        if self.components:
            output["components"] = [c.to_dict() for c in self.components]
        return output


@dataclass(frozen=True)
class FunctionSignature:
    """Function registered under a 4 byte selector"""

    name: str
    signature: str
    selector: str
    parameters: tuple[Parameter, ...]
    abi_name: str = ""

    def id_str(self, full_signature: bool = True) -> str:
        """Returns the canonical signature if full_signature is True, otherwise the function name"""
        if full_signature:
            return self.signature
        return self.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "signature": self.signature,
            "selector": self.selector,
            "abi_name": self.abi_name,
            "inputs": [p.to_dict() for p in self.parameters],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FunctionSignature":
        return cls(
            name=data["name"],
            signature=data["signature"],
            selector=data["selector"].lower(),
            parameters=tuple(Parameter.from_abi(p) for p in data.get("inputs", [])),
            abi_name=data.get("abi_name", ""),
        )


@dataclass(frozen=True)
class EventSignature:
    """Event registered under its 32 byte topic"""

    name: str
    signature: str
    topic: str
    parameters: tuple[Parameter, ...]
    abi_name: str = ""

    @property
    def indexed_count(self) -> int:
        """Number of top-level parameters stored in the log topics"""
        return sum(1 for p in self.parameters if p.indexed)

    def id_str(self, full_signature: bool = True) -> str:
        """Returns the canonical signature if full_signature is True, otherwise the event name"""
        if full_signature:
            return self.signature
        return self.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "signature": self.signature,
            "topic": self.topic,
            "abi_name": self.abi_name,
            "inputs": [p.to_dict() for p in self.parameters],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EventSignature":
        return cls(
            name=data["name"],
            signature=data["signature"],
            topic=data["topic"].lower(),
            parameters=tuple(Parameter.from_abi(p, event_param=True) for p in data.get("inputs", [])),
            abi_name=data.get("abi_name", ""),
        )
