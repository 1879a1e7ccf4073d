"""Build the member id -> family id index from family-membership files.

Each file describes exactly one family: every whitespace-separated token on
every line is a member gene id. Files are numbered in processing order, so
the same inputs in the same order always yield the same index.

A member id listed in several files ends up in the last family processed.
"""

from pathlib import Path
from typing import Iterable, Union

import structlog

from syntenybook.errors import CannotOpenFileError, ReadError
from syntenybook.families.models import FAMILY_ID_ORIGIN, Family, FamilyIndex
from syntenybook.sources import expand_sources

logger = structlog.get_logger()


def parse_family(path: Path, family_id: int, index: FamilyIndex, name_families: bool = False) -> Family:
    """Register the members of one family file under `family_id`.

    Raises:
        CannotOpenFileError: If the file cannot be opened
        ReadError: If reading fails midway
    """
    logger.debug("family_parse", path=str(path), family_id=family_id)
    try:
        handle = open(path, "r", encoding="utf-8")
    except OSError as e:
        raise CannotOpenFileError(str(path), e.strerror or str(e)) from e

    size = 0
    with handle:
        try:
            for line in handle:
                for member in line.split():
                    previous = index.id2family.get(member)
                    if previous is not None and previous != family_id:
                        index.overwritten += 1
                        logger.debug(
                            "family_member_overwritten",
                            member=member,
                            previous=previous,
                            family_id=family_id,
                        )
                    index.id2family[member] = family_id
                    size += 1
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(str(path), str(e)) from e

    family = Family(
        id=family_id,
        name=path.stem if name_families else None,
        source=path,
        size=size,
    )
    index.families.append(family)
    return family


def build_family_index(
    sources: Iterable[Union[str, Path]],
    name_families: bool = False,
) -> FamilyIndex:
    """
    Build a FamilyIndex from family files and/or directories of family files.

    Args:
        sources: Files or directories (expanded non-recursively, sorted by name)
        name_families: Attach the source file stem as each family's display name

    Returns:
        FamilyIndex with one family per file
    """
    files = expand_sources(sources)
    logger.info("family_index_start", files=len(files))

    index = FamilyIndex()
    for offset, path in enumerate(files):
        parse_family(path, FAMILY_ID_ORIGIN + offset, index, name_families=name_families)

    logger.info(
        "family_index_built",
        families=index.family_count,
        members=len(index),
        overwritten=index.overwritten,
    )
    return index


def build(sources: Iterable[Union[str, Path]]) -> tuple[dict[str, int], int]:
    """Return `(id2family, family_count)` for the given family sources."""
    index = build_family_index(sources)
    return index.id2family, index.family_count
