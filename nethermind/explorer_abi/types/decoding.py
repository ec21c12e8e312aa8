from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DecodedParam:
    """
    Decoded Parameter.  ``value`` is the formatted string form of the decoded value, or None if the
    parameter could not be decoded from the supplied data.
    """

    name: str
    type: str
    value: str | None
    indexed: bool = False
    components: tuple["DecodedParam", ...] | None = None

    @property
    def decoded(self) -> bool:
        """True if the value was successfully decoded"""
        return self.value is not None

    def to_dict(self) -> dict[str, Any]:
        output: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "value": self.value,
            "indexed": self.indexed,
        }
        if self.components is not None:
            output["components"] = [c.to_dict() for c in self.components]
        return output


@dataclass(frozen=True)
class DecodedCall:
    """Function Decoding Result"""

    name: str
    signature: str
    selector: str
    params: tuple[DecodedParam, ...]
    abi_name: str = ""

    @property
    def fully_decoded(self) -> bool:
        return all(p.decoded for p in self.params)

    def get_param(self, name: str) -> DecodedParam | None:
        return next((p for p in self.params if p.name == name), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "signature": self.signature,
            "selector": self.selector,
            "abi_name": self.abi_name,
            "params": [p.to_dict() for p in self.params],
        }


@dataclass(frozen=True)
class DecodedLog:
    """Event Decoding Result"""

    name: str
    signature: str
    topic: str
    params: tuple[DecodedParam, ...]
    abi_name: str = ""

    @property
    def fully_decoded(self) -> bool:
        return all(p.decoded for p in self.params)

    @property
    def indexed_params(self) -> list[DecodedParam]:
        """Parameters read from topics[1:], in topic order"""
        return [p for p in self.params if p.indexed]

    @property
    def data_params(self) -> list[DecodedParam]:
        """Parameters read from the log data"""
        return [p for p in self.params if not p.indexed]

    def get_param(self, name: str) -> DecodedParam | None:
        return next((p for p in self.params if p.name == name), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "signature": self.signature,
            "topic": self.topic,
            "abi_name": self.abi_name,
            "params": [p.to_dict() for p in self.params],
        }
