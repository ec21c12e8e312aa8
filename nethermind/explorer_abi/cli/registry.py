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


@click.group("registry", short_help="Build & Inspect Signature Registries")
def registry_group():
    """Build & Inspect Signature Registries"""


@registry_group.command()
@click.argument("corpus_dir", type=click.Path(exists=True, file_okay=False))
@click.argument("output", type=click.Path(dir_okay=False))
@group_options(verbose_option)
def build(corpus_dir: str, output: str, verbose: bool):
    """Compiles a directory of ABI JSON files into a registry artifact"""
    from nethermind.explorer_abi.registry import RegistryBuilder, load_corpus_directory, save_registry

    console = cli_logger_config(root_logger, logging.INFO if verbose else logging.WARNING)

    builder = RegistryBuilder()
    registry = load_corpus_directory(corpus_dir, builder)
    save_registry(registry, output)

    console.print(
        f"[green]Built registry from {len(builder.loaded_abis)} ABIs with {registry.function_count} functions and "
        f"{registry.event_count} events.  Saved to {output}"
    )
    if builder.skipped:
        console.print(f"[yellow]Skipped {len(builder.skipped)} documents: {', '.join(builder.skipped)}")


@registry_group.command("list")
@group_options(registry_option, corpus_option)
@click.option("--full-signatures", is_flag=True, default=False)
@click.option("--functions/--no-functions", "print_functions", default=True)
@click.option("--events/--no-events", "print_events", default=True)
def list_signatures(
    registry: str | None,
    corpus: str | None,
    full_signatures: bool,
    print_functions: bool,
    print_events: bool,
):
    """Lists every ABI in the registry, along with the function and event signatures each ABI contributed"""
    from nethermind.explorer_abi.cli.utils import resolve_registry

    console = cli_logger_config(root_logger, logging.WARNING)
    signature_registry = resolve_registry(registry, corpus)

    if not signature_registry.abi_names:
        console.print("[yellow]Registry is empty")
        return

    console.print(
        signature_registry.signature_table(
            print_functions=print_functions,
            print_events=print_events,
            full_signatures=full_signatures,
        )
    )
