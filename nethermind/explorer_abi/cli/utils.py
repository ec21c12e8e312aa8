import logging
import os
from logging import Logger

import click
from rich.console import Console
from rich.logging import RichHandler

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("explorer_abi").getChild("cli")


def cli_logger_config(instrument_logger: Logger, level: int = logging.INFO) -> Console:
    rich_console = Console()
    instrument_logger.handlers.clear()

    instrument_logger.addHandler(RichHandler(show_path=False, console=rich_console))
    instrument_logger.setLevel(level)
    return rich_console


def group_options(*options):
    """Decorator to group multiple click options together"""

    def wrapper(function):
        for option in reversed(options):
            function = option(function)
        return function

    return wrapper


# -------------------------------------------------------
#    Corpus & Registry Configuration
# -------------------------------------------------------
corpus_option = click.option(
    "--corpus",
    "-c",
    "corpus",
    default=os.environ.get("EXPLORER_ABI_CORPUS"),
    type=click.Path(file_okay=False),
    help="Directory of ABI JSON files.  If not provided, will use the EXPLORER_ABI_CORPUS environment variable",
)
registry_option = click.option(
    "--registry",
    "-r",
    "registry",
    default=os.environ.get("EXPLORER_ABI_REGISTRY"),
    type=click.Path(dir_okay=False),
    help="Registry artifact built with 'registry build'.  If not provided, will use the EXPLORER_ABI_REGISTRY "
    "environment variable",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    "verbose",
    is_flag=True,
    default=False,
    help="Log registry build and decoding diagnostics",
)


def resolve_registry(registry: str | None, corpus: str | None):
    """
    Loads the registry artifact if one is configured, otherwise builds a registry from the ABI corpus.

    :raises click.UsageError: if neither a registry nor a corpus is configured
    """
    from nethermind.explorer_abi.exceptions import RegistryError
    from nethermind.explorer_abi.registry import load_corpus_directory, load_registry

    if registry:
        try:
            return load_registry(registry)
        except RegistryError as e:
            raise click.ClickException(str(e)) from e

    if corpus:
        return load_corpus_directory(corpus)

    raise click.UsageError(
        "No signatures available.  Pass --registry or --corpus, or set EXPLORER_ABI_REGISTRY or EXPLORER_ABI_CORPUS"
    )
