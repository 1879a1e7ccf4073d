"""Regular expressions that pull species names and gene ids out of raw text."""

import re
from pathlib import Path
from typing import Union

from syntenybook.errors import (
    IdNotFoundError,
    InvalidFilenameError,
    InvalidRegexError,
    MissingCaptureGroupError,
    SpeciesNotFoundError,
)

SPECIES_GROUP = "species"
ID_GROUP = "id"


def compile_pattern(pattern: str, group: str) -> re.Pattern:
    """
    Compile `pattern` and check that it declares the named group `group`.

    Raises:
        InvalidRegexError: If the pattern does not compile
        MissingCaptureGroupError: If the named group is absent
    """
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise InvalidRegexError(pattern, str(e)) from e
    if group not in regex.groupindex:
        raise MissingCaptureGroupError(group, pattern)
    return regex


def extract_species(path: Union[str, Path], species_regex: re.Pattern) -> str:
    """Species name captured from the base name of `path`.

    Raises:
        InvalidFilenameError: If the path has no base name
        SpeciesNotFoundError: If the pattern does not match the base name
    """
    name = Path(path).name
    if not name:
        raise InvalidFilenameError(str(path))
    match = species_regex.search(name)
    if match is None or match.group(SPECIES_GROUP) is None:
        raise SpeciesNotFoundError(str(path))
    return match.group(SPECIES_GROUP)


def extract_id(raw_id: str, id_regex: re.Pattern) -> str:
    """Canonical gene id captured from a raw record id.

    Raises:
        IdNotFoundError: If the pattern does not match
    """
    match = id_regex.search(raw_id)
    if match is None or match.group(ID_GROUP) is None:
        raise IdNotFoundError(raw_id)
    return match.group(ID_GROUP)
