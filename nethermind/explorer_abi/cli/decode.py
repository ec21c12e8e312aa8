import json
import logging

import click

from nethermind.explorer_abi.cli.utils import (
    cli_logger_config,
    corpus_option,
    group_options,
    registry_option,
    verbose_option,
)

# isort: skip_file
# pylint: disable=import-outside-toplevel

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("explorer_abi").getChild("cli")


@click.group("decode", short_help="Decode Calldata & Event Logs")
def decode_group():
    """Decode Calldata & Event Logs"""


@decode_group.command("input")
@group_options(registry_option, corpus_option, verbose_option)
@click.argument("calldata")
def decode_input(registry: str | None, corpus: str | None, verbose: bool, calldata: str):
    """Decodes transaction calldata"""
    from nethermind.explorer_abi.cli.utils import resolve_registry
    from nethermind.explorer_abi.decoding import decode_function_input

    console = cli_logger_config(root_logger, logging.DEBUG if verbose else logging.WARNING)
    signature_registry = resolve_registry(registry, corpus)

    decoded = decode_function_input(signature_registry, calldata)
    if decoded is None:
        console.print("[yellow]Calldata is not decodable with the loaded signature registry")
        return

    console.print_json(json.dumps(decoded.to_dict()))


@decode_group.command("log")
@group_options(registry_option, corpus_option, verbose_option)
@click.option("--topic", "-t", "topics", multiple=True, help="Log topic.  Repeat for each topic, in order")
@click.option("--data", "-d", "data", default="0x", show_default=True, help="Log data")
def decode_log(registry: str | None, corpus: str | None, verbose: bool, topics: tuple[str, ...], data: str):
    """Decodes an event log from its topics and data"""
    from nethermind.explorer_abi.cli.utils import resolve_registry
    from nethermind.explorer_abi.decoding import decode_event_log

    console = cli_logger_config(root_logger, logging.DEBUG if verbose else logging.WARNING)
    signature_registry = resolve_registry(registry, corpus)

    decoded = decode_event_log(signature_registry, list(topics), data)
    if decoded is None:
        console.print("[yellow]Log is not decodable with the loaded signature registry")
        return

    console.print_json(json.dumps(decoded.to_dict()))
