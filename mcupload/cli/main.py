"""Main CLI entry point for mcupload."""

from __future__ import annotations

import click

from mcupload import __version__
from mcupload.cli.config_cmd import config
from mcupload.cli.upload import status, upload


@click.group()
@click.version_option(version=__version__, prog_name="mcupload")
def cli() -> None:
    """mcupload - chunked resumable uploads to Materials Commons.

    Get started:

      mcupload config init                                  # Create config file

      export MC_API_KEY=...                                 # Set your API key

      mcupload upload big.h5 --project-id 42 --dest /raw    # Upload a file

    Use --help on any command for more information.
    """
    pass


cli.add_command(config)
cli.add_command(upload)
cli.add_command(status)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
