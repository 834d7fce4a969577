"""PremiumPool CLI entry point - assembles all command groups."""
import click

from . import __version__
from .pool_cmd import defaults, run


@click.group()
@click.version_option(version=__version__)
def cli():
    """PremiumPool: escrow ledger for commodity-sale premiums."""
    pass


cli.add_command(run)
cli.add_command(defaults)


if __name__ == "__main__":
    cli()
