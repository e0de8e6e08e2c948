"""Options shared by the mcassets subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from ..scrape import parse_delimited_regexp, read_version_file

DEFAULT_CACHE_KEY = "minecraft-assets"

log = logging.getLogger("mcassets/cli")

data_dir_option = click.option(
    "-d",
    "--dir",
    "assets_dir",
    default=None,
    envvar="MCASSETS_DIR",
    help="Assets directory (default: ~/.minecraft/assets)",
)

cache_key_option = click.option(
    "--cache-key",
    "cache_key_prefix",
    default=DEFAULT_CACHE_KEY,
    show_default=True,
    envvar="MCASSETS_CACHE_KEY",
    help="Prefix of the cache key",
)

cache_dir_option = click.option(
    "--cache-dir",
    default=None,
    envvar="MCASSETS_CACHE_DIR",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding the cached assets archives",
)


def versions_options(func):
    """Decorate a command with the options selecting the versions."""
    func = click.option(
        "--version-regexp",
        default=None,
        envvar="MCASSETS_VERSION_REGEXP",
        help="Regular expression, in the /pattern/flags form, locating a version in --version-file",
    )(func)
    func = click.option(
        "--version-file",
        default=None,
        envvar="MCASSETS_VERSION_FILE",
        type=click.Path(dir_okay=False, path_type=Path),
        help="File in which to look for the current version",
    )(func)
    func = click.option(
        "--versions",
        multiple=True,
        envvar="MCASSETS_VERSIONS",
        help="Versions to include, one per line (repeatable)",
    )(func)
    return func


def collect_versions(
    versions: tuple[str, ...],
    version_file: Path | None,
    version_regexp: str | None,
) -> list[str]:
    """
    Return the versions given on the command line, one per non-empty line,
    followed by the version found in the version file, if any.
    """
    result = [
        line.strip() for value in versions for line in value.splitlines() if line.strip()
    ]
    log.info("configured versions: %s", ", ".join(result))
    if version_file is not None and version_regexp:
        try:
            pattern = parse_delimited_regexp(version_regexp)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--version-regexp") from exc
        found = read_version_file(version_file, pattern)
        log.info("detected version from %s: %s", version_file, found)
        if found:
            result.append(found)
    return result
