"""Expansion of file/directory arguments into an ordered list of files."""

from pathlib import Path
from typing import Iterable, Union

import structlog

from syntenybook.errors import CannotOpenFileError

logger = structlog.get_logger()


def expand_sources(sources: Iterable[Union[str, Path]]) -> list[Path]:
    """
    Expand input paths, replacing each directory by the files it contains.

    Expansion is not recursive: sub-directories are skipped. Directory
    entries are sorted by name so the resulting order is the same on
    every filesystem.

    Args:
        sources: Files and/or directories, in processing order

    Returns:
        Files in processing order

    Raises:
        CannotOpenFileError: If a directory cannot be listed
    """
    files: list[Path] = []
    for source in sources:
        path = Path(source)
        if not path.is_dir():
            files.append(path)
            continue

        try:
            entries = sorted(path.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise CannotOpenFileError(str(path), e.strerror or str(e)) from e

        for entry in entries:
            if entry.is_dir():
                logger.debug("skipping_subdirectory", path=str(entry))
                continue
            files.append(entry)
    return files
