import logging
import shutil
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, TypedDict

from rich.table import Table

from nethermind.explorer_abi.exceptions import AbiDefinitionError
from nethermind.explorer_abi.types.abi import EventSignature, FunctionSignature
from nethermind.explorer_abi.utils import normalize_hex_key, pprint_list

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("explorer_abi").getChild("registry")


class GroupedAbi(TypedDict):
    """Grouped Abi Data Helper Class for Visualizing a SignatureRegistry to console"""

    functions: list[FunctionSignature]
    events: list[EventSignature]


def validate_signature(signature: FunctionSignature | EventSignature):
    """
    Parses every parameter type of a signature, so unsupported types are rejected when a registry is assembled
    and never while decoding.

    :raises AbiDefinitionError: if a parameter type is unsupported, or an event indexes more than 3 params
    """
    for param in signature.parameters:
        _ = param.abi_type

    if isinstance(signature, EventSignature) and signature.indexed_count > 3:
        raise AbiDefinitionError(
            f"Event {signature.signature} indexes {signature.indexed_count} params.  Logs allow at most 3"
        )


def insert_function_signature(table: dict[str, FunctionSignature], func: FunctionSignature) -> bool:
    """
    Adds a function signature to a selector table.  The first signature registered for a selector wins, and
    later signatures with the same selector are dropped.

    :return: True if the signature was added
    """
    existing = table.get(func.selector)
    if existing is None:
        table[func.selector] = func
        return True

    if existing.signature != func.signature:
        logger.debug(
            f"Selector collision on {func.selector}: keeping {existing.signature} from ABI {existing.abi_name}, "
            f"dropping {func.signature} from ABI {func.abi_name}"
        )
    return False


def insert_event_signature(table: dict[str, list[EventSignature]], event: EventSignature) -> bool:
    """
    Adds an event signature to a topic table.  Events sharing a topic but indexing a different number of
    parameters are kept side by side as variants.  If a variant with the same number of indexed parameters is
    already present, the first loaded variant is kept.

    :return: True if the signature was added as a new variant
    """
    variants = table.setdefault(event.topic, [])
    for existing in variants:
        if existing.indexed_count == event.indexed_count:
            logger.debug(
                f"Event {event.signature} with {event.indexed_count} indexed params already loaded from ABI "
                f"{existing.abi_name}.  Keeping first loaded variant..."
            )
            return False

    if variants:
        logger.debug(f"Loading {event.signature} at multiple index levels: {event.indexed_count} indexed params")
    variants.append(event)
    return True


@dataclass(frozen=True)
class SignatureRegistry:
    """
    Immutable lookup tables mapping function selectors and event topics to their signatures.

    Registries are built once with :class:`~nethermind.explorer_abi.registry.builder.RegistryBuilder`, and are
    never mutated afterwards, so a single instance can be shared between any number of concurrent decoders.
    To pick up a new corpus, build a new registry and swap the reference.
    """

    events_by_topic: Mapping[str, tuple[EventSignature, ...]]
    """ Mapping from 32 byte event topics to every indexed-count variant of the event """

    functions_by_selector: Mapping[str, FunctionSignature]
    """ Mapping from 4 byte selectors to the first function registered with that selector """

    def __post_init__(self):
        object.__setattr__(
            self,
            "events_by_topic",
            MappingProxyType({normalize_hex_key(k): tuple(v) for k, v in self.events_by_topic.items()}),
        )
        object.__setattr__(
            self,
            "functions_by_selector",
            MappingProxyType({normalize_hex_key(k): v for k, v in self.functions_by_selector.items()}),
        )

    @classmethod
    def empty(cls) -> "SignatureRegistry":
        return cls(events_by_topic={}, functions_by_selector={})

    @property
    def function_count(self) -> int:
        return len(self.functions_by_selector)

    @property
    def event_count(self) -> int:
        """Number of event signatures, counting every variant"""
        return sum(len(variants) for variants in self.events_by_topic.values())

    @property
    def abi_names(self) -> list[str]:
        """Sorted names of every ABI that contributed at least one signature"""
        names = {f.abi_name for f in self.functions_by_selector.values()}
        names.update(e.abi_name for variants in self.events_by_topic.values() for e in variants)
        return sorted(names)

    def get_function(self, selector: str) -> FunctionSignature | None:
        """Returns the function registered for a 4 byte selector"""
        return self.functions_by_selector.get(normalize_hex_key(selector))

    def get_event_variants(self, topic: str) -> tuple[EventSignature, ...]:
        """Returns every variant registered for an event topic, in load order"""
        return self.events_by_topic.get(normalize_hex_key(topic), ())

    def select_event_variant(self, topic: str, indexed_count: int) -> EventSignature | None:
        """
        Selects the event variant to decode a log with.  Prefers the variant with ``indexed_count`` indexed
        parameters, and falls back to the first loaded variant when none matches.

        :param topic: topics[0] of the log
        :param indexed_count: number of topics in the log, excluding topics[0]
        """
        variants = self.get_event_variants(topic)
        if not variants:
            return None

        for variant in variants:
            if variant.indexed_count == indexed_count:
                return variant

        logger.debug(
            f"No variant of {variants[0].signature} indexes {indexed_count} params.  Falling back to variant "
            f"with {variants[0].indexed_count} indexed params"
        )
        return variants[0]

    def get_flattened_events(self) -> list[EventSignature]:
        """
        Returns one signature per topic.  If there are multiple index levels for an event, will return the
        variant with the fewest indexed parameters.
        """
        return [min(variants, key=lambda e: e.indexed_count) for variants in self.events_by_topic.values()]

    def to_dict(self) -> dict[str, Any]:
        """JSON compatible representation, used for persisting registries as static artifacts"""
        return {
            "functions": [f.to_dict() for f in self.functions_by_selector.values()],
            "events": [e.to_dict() for variants in self.events_by_topic.values() for e in variants],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SignatureRegistry":
        """
        Loads a registry from :meth:`to_dict` output.  Signatures are re-inserted with the same collision rules
        used when building, so edited artifacts cannot contain duplicate selectors or event variants.  Parameter
        types are parsed while loading.

        :raises AbiDefinitionError: if a signature has an unsupported parameter type
        """
        functions: dict[str, FunctionSignature] = {}
        events: dict[str, list[EventSignature]] = {}

        for func_data in data.get("functions", []):
            func = FunctionSignature.from_dict(func_data)
            validate_signature(func)
            insert_function_signature(functions, func)

        for event_data in data.get("events", []):
            event = EventSignature.from_dict(event_data)
            validate_signature(event)
            insert_event_signature(events, event)

        return cls(
            events_by_topic={topic: tuple(variants) for topic, variants in events.items()},
            functions_by_selector=functions,
        )

    def _group_abis(self) -> dict[str, GroupedAbi]:
        output_dict: dict[str, GroupedAbi] = {name: {"functions": [], "events": []} for name in self.abi_names}

        for func in self.functions_by_selector.values():
            output_dict[func.abi_name]["functions"].append(func)

        for event in self.get_flattened_events():
            output_dict[event.abi_name]["events"].append(event)

        return output_dict

    def signature_table(
        self,
        print_functions: bool = True,
        print_events: bool = True,
        full_signatures: bool = False,
    ) -> Table:
        """
        Returns a rich table with every ABI in the registry, and the function and event signatures each ABI
        contributed.  Used for printing out registry information in the CLI

        :param print_functions:
        :param print_events:
        :param full_signatures:
        :return:
        """
        fs = full_signatures
        term_width = shutil.get_terminal_size().columns
        abi_table = Table(title="[bold magenta]Signature Registry", min_width=80, show_lines=True)

        abi_table.add_column("ABI Name")

        if print_functions:
            abi_table.add_column("Functions")
        if print_events:
            abi_table.add_column("Events")

        for abi_name, abi_params in self._group_abis().items():
            events, funcs = abi_params["events"], abi_params["functions"]
            match print_functions, print_events:
                case True, True:
                    sig_cols = [
                        "\n".join(pprint_list(sorted(f.id_str(fs) for f in funcs), int(term_width * 0.4))),
                        "\n".join(pprint_list(sorted(e.id_str(fs) for e in events), int(term_width * 0.3))),
                    ]
                case True, False:
                    sig_cols = [
                        "\n".join(pprint_list(sorted(f.id_str(fs) for f in funcs), int(term_width * 0.7))),
                    ]
                case False, True:
                    sig_cols = [
                        "\n".join(pprint_list(sorted(e.id_str(fs) for e in events), int(term_width * 0.7))),
                    ]
                case _:
                    sig_cols = []

            abi_table.add_row(abi_name, *sig_cols)

        return abi_table
