"""sourcevault CLI - Main entry point and command registration hub."""
# ruff: noqa: E402 - Intentional lazy loading: commands imported after cli group definition

import click

from sourcevault import __version__


@click.group()
@click.version_option(version=__version__, prog_name="svault")
@click.help_option("-h", "--help")
def cli():
    """sourcevault - per-file source storage with incremental persistence

    \b
    QUICK START:
      svault scan --root .                 # Build an analysis report
      svault persist                       # Store what changed
      svault show myproject:src/app.py     # Print a stored file

    \b
    For detailed options: svault <command> --help"""
    pass


from sourcevault.commands.persist import persist
from sourcevault.commands.scan import scan
from sourcevault.commands.show import show

cli.add_command(scan)
cli.add_command(persist)
cli.add_command(show)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
