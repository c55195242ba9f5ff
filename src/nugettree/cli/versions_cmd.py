"""``nugettree versions <package>`` — List the published versions of a package.

Usage::

    nugettree versions Newtonsoft.Json
    nugettree versions Serilog --format json
"""

from __future__ import annotations

import asyncio
import sys

import click

from nugettree.cli.output import (
    print_error,
    print_json,
    print_json_error,
    print_not_found,
    print_versions,
)
from nugettree.exceptions import NugetTreeError
from nugettree.registry.client import NUGET_SERVICE_INDEX, NuGetClient
from nugettree.registry.http_client import open_http_client


async def _list_versions(source: str, package: str) -> list[str] | None:
    async with open_http_client() as http:
        return await NuGetClient(source, http_client=http).list_versions(package)


@click.command("versions")
@click.argument("package")
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
def versions_command(package: str, output_format: str, source: str) -> None:
    """List every published version of a NuGet package, oldest first.

    The last version listed is the one ``nugettree tree`` resolves when
    no version is given.
    """
    as_json = output_format == "json"
    try:
        versions = asyncio.run(_list_versions(source, package))
    except NugetTreeError as exc:
        if as_json:
            print_json_error(package, str(exc))
        else:
            print_error(str(exc))
        sys.exit(1)

    if versions is None:
        if as_json:
            print_json_error(package, "not found")
        else:
            print_not_found(package)
        sys.exit(2)

    if as_json:
        print_json({"id": package, "versions": versions})
    else:
        print_versions(package, versions)
    sys.exit(0)
