import json
import logging
from pathlib import Path

from nethermind.explorer_abi.exceptions import AbiDefinitionError, RegistryError

from .builder import RegistryBuilder
from .registry import SignatureRegistry

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("explorer_abi").getChild("registry")


def load_corpus_directory(corpus_dir: str | Path, builder: RegistryBuilder | None = None) -> SignatureRegistry:
    """
    Builds a registry from every ``*.json`` ABI document below a directory.

    Files are loaded in sorted path order, so selector collisions are always resolved the same way for the same
    corpus.  Each ABI is named after its path relative to the corpus root, without the suffix.

    :param corpus_dir: Directory containing ABI JSON files or compiler artifacts
    :param builder: Optional builder to load documents into.  Useful for inspecting skipped documents
    """
    corpus_path = Path(corpus_dir)
    builder = builder or RegistryBuilder()

    if not corpus_path.is_dir():
        logger.warning(f"ABI corpus directory {corpus_path} does not exist.  Building empty registry")
        return builder.build()

    for abi_file in sorted(corpus_path.rglob("*.json")):
        abi_name = abi_file.relative_to(corpus_path).with_suffix("").as_posix()
        try:
            raw_json = abi_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping ABI {abi_name}: could not read {abi_file}: {e}")
            builder.skipped.append(abi_name)
            continue

        builder.add_abi_json(abi_name, raw_json)

    return builder.build()


def save_registry(registry: SignatureRegistry, path: str | Path):
    """Writes a registry to disk as a static JSON artifact"""
    registry_path = Path(path)
    registry_path.parent.mkdir(parents=True, exist_ok=True)
    registry_path.write_text(json.dumps(registry.to_dict(), indent=2), encoding="utf-8")
    logger.info(
        f"Saved registry with {registry.function_count} functions and {registry.event_count} events to {path}"
    )


def load_registry(path: str | Path) -> SignatureRegistry:
    """
    Loads a registry artifact written by :func:`save_registry`

    :raises RegistryError: if the artifact cannot be read or does not describe a registry
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise RegistryError(f"Could not read signature registry from {path}: {e}") from e

    if not isinstance(data, dict):
        raise RegistryError(f"Signature registry at {path} must be a JSON object")

    try:
        return SignatureRegistry.from_dict(data)
    except (AbiDefinitionError, KeyError, TypeError, AttributeError) as e:
        raise RegistryError(f"Signature registry at {path} is malformed: {e}") from e
