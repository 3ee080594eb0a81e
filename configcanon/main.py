# configcanon/main.py

"""Command line interface for the Minecraft config canonicalizer.

Canonicalizes or fingerprints a server config file the same way the lookup
service and the build ingestion do, so results can be compared by hand.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from configcanon.logging_config import configure_logging
from configcanon.core.exceptions import CanonicalizationError
from configcanon.service.config import settings
from configcanon.service.pipeline import (
    CanonicalizerService,
    canonicalize,
    fingerprint,
)

logger = logging.getLogger(__name__)


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        logger.error("Unreadable config file", extra={"path": str(path)})
        raise click.ClickException(f"{path} is not valid UTF-8 text") from e


@click.group()
@click.option("--log-level", default=None, help="Override CONFIGCANON_LOG_LEVEL.")
def main(log_level: Optional[str]) -> None:
    """Canonicalize Minecraft server config files."""
    configure_logging(
        level=log_level or settings.log_level,
        log_format=settings.log_format,
        stream=sys.stderr,
    )


@main.command("canonicalize")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--as",
    "identity",
    default=None,
    help="File identity to use instead of the file's own path.",
)
def canonicalize_command(file: Path, identity: Optional[str]) -> None:
    """Print the canonical form of FILE."""
    try:
        value = canonicalize(identity or file.as_posix(), _read(file))
    except CanonicalizationError as e:
        logger.error("Canonicalization failed", extra={"path": str(file)})
        raise click.ClickException(str(e)) from e

    click.echo(value, nl=not value.endswith("\n"))


@main.command("fingerprint")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--as",
    "identity",
    default=None,
    help="File identity to use instead of the file's own path.",
)
def fingerprint_command(file: Path, identity: Optional[str]) -> None:
    """Print the location, format, version marker and digests of FILE."""
    try:
        result = fingerprint(identity or file.as_posix(), _read(file))
    except CanonicalizationError as e:
        logger.error("Fingerprinting failed", extra={"path": str(file)})
        raise click.ClickException(str(e)) from e

    click.echo(f"location: {result.location or '-'}")
    click.echo(f"format: {result.format.value}")
    click.echo(f"version-marker: {result.version_marker or '-'}")
    for algorithm, digest in result.digests.items():
        click.echo(f"{algorithm}: {digest}")


@main.command("list")
def list_command() -> None:
    """List the known config files and their aliases."""
    try:
        registry = CanonicalizerService.get_instance().registry
    except CanonicalizationError as e:
        raise click.ClickException(str(e)) from e

    for config_file in registry.files():
        aliases = ", ".join(config_file.aliases)
        click.echo(
            f"{config_file.location}\t{config_file.server_type.value}\t"
            f"{config_file.format.value}\t{aliases}"
        )


if __name__ == "__main__":
    main()
