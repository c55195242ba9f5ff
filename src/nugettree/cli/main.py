"""nugettree CLI — Transitive dependency trees for NuGet packages.

Entry point for the ``nugettree`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    tree     — Resolve and print a package's dependency tree.
    versions — List a package's published versions.

Usage::

    nugettree tree Newtonsoft.Json
    nugettree tree Serilog -v 3.1.1 -f netstandard2.0
    nugettree --debug tree Polly --format json
    nugettree versions Newtonsoft.Json
"""

from __future__ import annotations

import logging

import click

from nugettree import __version__
from nugettree.cli.tree_cmd import tree_command
from nugettree.cli.versions_cmd import versions_command


@click.group()
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Log every registry request to stderr.")
def cli(debug: bool) -> None:
    """nugettree: Transitive dependency trees for NuGet packages.

    Walks a NuGet v3 registry from a root package down through every
    dependency, selecting the dependency group that matches a target
    framework, and prints the result as a tree.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


# Register all subcommands
cli.add_command(tree_command)
cli.add_command(versions_command)
