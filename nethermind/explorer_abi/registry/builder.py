import json
import logging
from typing import Any, Iterable, Mapping

from eth_utils import encode_hex
from eth_utils.abi import event_signature_to_log_topic, function_signature_to_4byte_selector

from nethermind.explorer_abi.decoding.utils import (
    canonical_signature,
    filter_events,
    filter_functions,
)
from nethermind.explorer_abi.exceptions import AbiDefinitionError
from nethermind.explorer_abi.types.abi import EventSignature, FunctionSignature, Parameter

from .registry import (
    SignatureRegistry,
    insert_event_signature,
    insert_function_signature,
    validate_signature,
)

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("explorer_abi").getChild("registry")


def _entry_parameters(abi_entry: Any, event_param: bool) -> tuple[str, tuple[Parameter, ...]]:
    if not isinstance(abi_entry.get("name"), str) or not abi_entry["name"]:
        raise AbiDefinitionError(f"ABI {abi_entry.get('type', 'function')} entry is missing a name")

    inputs = abi_entry.get("inputs") or []
    if not isinstance(inputs, list):
        raise AbiDefinitionError(f"Inputs of {abi_entry['name']} must be a list")

    return abi_entry["name"], tuple(Parameter.from_abi(i, event_param=event_param) for i in inputs)


def function_signature_from_abi(abi_function: Any, abi_name: str = "") -> FunctionSignature:
    """
    Computes the canonical signature and 4 byte selector for an ABI function entry.

    :param abi_function: ABI JSON function entry
    :param abi_name: Name of the ABI the function belongs to
    :raises AbiDefinitionError: if the entry is malformed
    """
    name, parameters = _entry_parameters(abi_function, event_param=False)
    signature = canonical_signature(name, parameters)

    func = FunctionSignature(
        name=name,
        signature=signature,
        selector=encode_hex(function_signature_to_4byte_selector(signature)),
        parameters=parameters,
        abi_name=abi_name,
    )
    validate_signature(func)
    return func


def event_signature_from_abi(abi_event: Any, abi_name: str = "") -> EventSignature:
    """
    Computes the canonical signature and 32 byte topic for an ABI event entry.

    :param abi_event: ABI JSON event entry
    :param abi_name: Name of the ABI the event belongs to
    :raises AbiDefinitionError: if the entry is malformed
    """
    name, parameters = _entry_parameters(abi_event, event_param=True)
    signature = canonical_signature(name, parameters)

    event = EventSignature(
        name=name,
        signature=signature,
        topic=encode_hex(event_signature_to_log_topic(signature)),
        parameters=parameters,
        abi_name=abi_name,
    )
    validate_signature(event)
    return event


class RegistryBuilder:
    """

    Compiles a corpus of ABI documents into a :class:`SignatureRegistry`.  Handles conflicts between ABIs with
    overlapping function selectors and event topics.

    Malformed documents and entries are skipped with a warning.  The builder never raises on corpus contents.

    """

    loaded_abis: list[str]
    """ Names of every ABI document loaded into the builder """

    skipped: list[str]
    """ Names of ABI documents that could not be loaded """

    _functions: dict[str, FunctionSignature]
    _events: dict[str, list[EventSignature]]

    def __init__(self):
        self.loaded_abis = []
        self.skipped = []
        self._functions = {}
        self._events = {}

    def add_abi(self, abi_name: str, abi_data: Any) -> bool:
        """
        Adds an ABI document to the builder.  If 2 ABIs share a function selector, the signature loaded first is
        kept.  Events sharing a topic are kept as variants when they index a different number of parameters.

        :param abi_name: Name of ABI
        :param abi_data: List of ABI entries, or a compiler artifact dict containing an ``abi`` key
        :return: True if the document was loaded
        """
        if abi_name in self.loaded_abis:
            logger.warning(f"{abi_name} ABI already loaded into registry.  Skipping duplicate document...")
            self.skipped.append(abi_name)
            return False

        if isinstance(abi_data, dict) and isinstance(abi_data.get("abi"), list):
            abi_data = abi_data["abi"]

        if not isinstance(abi_data, list):
            logger.warning(
                f"Skipping ABI {abi_name}: expected a list of ABI entries, got {type(abi_data).__name__}"
            )
            self.skipped.append(abi_name)
            return False

        logger.info(f"Adding ABI {abi_name} to registry")

        for abi_function in filter_functions(abi_data):
            try:
                self.add_function_signature(function_signature_from_abi(abi_function, abi_name))
            except AbiDefinitionError as e:
                logger.warning(f"Skipping function {abi_function.get('name')!r} in ABI {abi_name}: {e}")

        for abi_event in filter_events(abi_data):
            if abi_event.get("anonymous", False):
                logger.debug(f"Skipping anonymous event {abi_event.get('name')!r} in ABI {abi_name}")
                continue
            try:
                self.add_event_signature(event_signature_from_abi(abi_event, abi_name))
            except AbiDefinitionError as e:
                logger.warning(f"Skipping event {abi_event.get('name')!r} in ABI {abi_name}: {e}")

        self.loaded_abis.append(abi_name)
        return True

    def add_abi_json(self, abi_name: str, raw_json: str | bytes) -> bool:
        """
        Parses a JSON ABI document and adds it to the builder.  Unparseable documents are skipped with a warning.
        """
        try:
            abi_data = json.loads(raw_json)
        except ValueError as e:
            logger.warning(f"Skipping ABI {abi_name}: could not parse JSON: {e}")
            self.skipped.append(abi_name)
            return False

        return self.add_abi(abi_name, abi_data)

    def add_function_signature(self, func: FunctionSignature) -> bool:
        """
        Adds a function signature.  The first signature loaded for a selector wins

        :raises AbiDefinitionError: if a parameter type is unsupported
        """
        validate_signature(func)
        return insert_function_signature(self._functions, func)

    def add_event_signature(self, event: EventSignature) -> bool:
        """
        Adds an event signature as a new variant of its topic, unless the variant is already present

        :raises AbiDefinitionError: if a parameter type is unsupported, or the event indexes more than 3 params
        """
        validate_signature(event)
        return insert_event_signature(self._events, event)

    def build(self) -> SignatureRegistry:
        """
        Returns an immutable snapshot of the signatures loaded so far.  Adding more ABIs afterwards does not
        affect registries that were already built.
        """
        logger.info(
            f"Built signature registry from {len(self.loaded_abis)} ABIs with {len(self._functions)} functions "
            f"and {sum(len(v) for v in self._events.values())} events"
        )
        return SignatureRegistry(
            events_by_topic={topic: tuple(variants) for topic, variants in self._events.items()},
            functions_by_selector=dict(self._functions),
        )


def build_registry(corpus: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> SignatureRegistry:
    """
    Builds a registry from a corpus of ABI documents, loaded in iteration order.

    :param corpus: Mapping or iterable of (abi_name, abi_data) pairs.  abi_data may be a parsed ABI, an
        artifact dict, or a raw JSON string
    """
    builder = RegistryBuilder()
    items = corpus.items() if isinstance(corpus, Mapping) else corpus

    for abi_name, abi_data in items:
        if isinstance(abi_data, (str, bytes)):
            builder.add_abi_json(abi_name, abi_data)
        else:
            builder.add_abi(abi_name, abi_data)

    return builder.build()
