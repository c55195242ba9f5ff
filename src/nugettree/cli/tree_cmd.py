"""``nugettree tree <package>`` — Resolve and print a dependency tree.

Usage::

    nugettree tree Newtonsoft.Json
    nugettree tree Microsoft.Extensions.Logging -v 8.0.0 -f net8.0
    nugettree tree Serilog --format json

Exit Codes:
    0 — Tree printed.
    1 — Registry error (unreachable registry, bad response, unsupported API).
    2 — Package or requested version not found.
"""

from __future__ import annotations

import asyncio
import sys

import click

from nugettree.cli.output import (
    console,
    print_error,
    print_json,
    print_json_error,
    print_not_found,
    render_tree,
)
from nugettree.core.resolver import DependencyTree, resolve_tree
from nugettree.exceptions import NugetTreeError
from nugettree.registry.client import NUGET_SERVICE_INDEX, NuGetClient
from nugettree.registry.http_client import open_http_client


async def _resolve(
    source: str,
    package: str,
    version: str | None,
    framework: str | None,
) -> DependencyTree | None:
    async with open_http_client() as http:
        client = NuGetClient(source, http_client=http)
        return await resolve_tree(client, package, version, framework)


@click.command("tree")
@click.argument("package")
@click.option("-v", "--version", "version", default=None, help="Package version (defaults to latest).")
@click.option(
    "-f", "--framework", "framework", default=None,
    help="Target framework moniker (e.g. net8.0, net461, netstandard2.0).",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "--source", default=NUGET_SERVICE_INDEX, show_default=True,
    help="NuGet v3 service index URL.",
)
def tree_command(
    package: str,
    version: str | None,
    framework: str | None,
    output_format: str,
    source: str,
) -> None:
    """Print the transitive dependency tree of a NuGet package.

    Each dependency is resolved at its latest version for the selected
    target framework. A package repeated on its own path is shown as a
    circular reference and not expanded again.

    With ``--format json`` failures are reported as a JSON object with an
    ``error`` key on stdout.

    Examples:

        nugettree tree Newtonsoft.Json

        nugettree tree Serilog -v 3.1.1 -f netstandard2.0

        nugettree tree Polly --format json
    """
    as_json = output_format == "json"
    try:
        if as_json:
            resolved = asyncio.run(_resolve(source, package, version, framework))
        else:
            with console.status(f"Resolving {package}..."):
                resolved = asyncio.run(_resolve(source, package, version, framework))
    except NugetTreeError as exc:
        if as_json:
            print_json_error(package, str(exc))
        else:
            print_error(str(exc))
        sys.exit(1)

    if resolved is None:
        if as_json:
            print_json_error(package, "not found")
        else:
            print_not_found(package)
        sys.exit(2)

    if as_json:
        print_json(resolved.to_dict())
    else:
        console.print(render_tree(resolved))
    sys.exit(0)
