"""Lookup of a version string inside a local text file."""

from __future__ import annotations

import re
from pathlib import Path

_DELIMITED_RE = re.compile(r"^/(.*)/([a-z]*)$", re.DOTALL)

_FLAGS: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": re.UNICODE,
}

# Flags that only change how a pattern is iterated, which does not
# matter when we look at the first match.
_IGNORED_FLAGS = frozenset("gyd")


def parse_delimited_regexp(value: str) -> re.Pattern[str]:
    """
    Compile a regular expression given as `/pattern/flags`.

    Raises:
        ValueError: if the value is not in the `/pattern/flags` form,
            uses unknown flags, or the pattern does not compile.
    """
    match = _DELIMITED_RE.match(value)
    if match is None:
        raise ValueError(f"regular expression must have the /pattern/flags form: {value}")
    pattern, letters = match.groups()
    flags = re.RegexFlag(0)
    for letter in letters:
        if letter in _IGNORED_FLAGS:
            continue
        if letter not in _FLAGS:
            raise ValueError(f"unsupported regular expression flag: {letter}")
        flags |= _FLAGS[letter]
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise ValueError(f"invalid regular expression {value}: {exc}") from exc


def scrape_version(content: str | None, pattern: re.Pattern[str]) -> str | None:
    """Return the first group of the first match in content, or None."""
    if content is None:
        return None
    match = pattern.search(content)
    if match is None or pattern.groups < 1:
        return None
    return match.group(1)


def read_version_file(path: Path, pattern: re.Pattern[str]) -> str | None:
    """
    Scrape a version from the given file.

    Returns None when the file does not exist or nothing matches.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        content = None
    return scrape_version(content, pattern)
