import click

from nethermind.explorer_abi.cli.decode import decode_group
from nethermind.explorer_abi.cli.registry import registry_group


@click.group()
def explorer_abi_cli():
    """Command Line Interface for the Nethermind Explorer ABI Decoder"""


# Adding Command Groups
explorer_abi_cli.add_command(registry_group, name="registry")
explorer_abi_cli.add_command(decode_group, name="decode")
