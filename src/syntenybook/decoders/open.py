"""Opening annotation files with transparent gzip decompression."""

import gzip
import io
from pathlib import Path
from typing import TextIO, Union

from syntenybook.errors import CannotOpenFileError

GZIP_MAGIC = b"\x1f\x8b"


def is_gzipped(path: Union[str, Path]) -> bool:
    """Sniff the gzip magic bytes; the file extension is not trusted."""
    try:
        with open(path, "rb") as f:
            return f.read(len(GZIP_MAGIC)) == GZIP_MAGIC
    except OSError as e:
        raise CannotOpenFileError(str(path), e.strerror or str(e)) from e


def open_annotation(path: Union[str, Path]) -> TextIO:
    """
    Open an annotation file for reading as text.

    Args:
        path: Plain or gzip-compressed file

    Returns:
        Text handle positioned at the start of the (decompressed) content

    Raises:
        CannotOpenFileError: If the file cannot be opened
    """
    if is_gzipped(path):
        return io.TextIOWrapper(gzip.open(path, "rb"), encoding="utf-8")
    try:
        return open(path, "r", encoding="utf-8")
    except OSError as e:
        raise CannotOpenFileError(str(path), e.strerror or str(e)) from e


def strip_compression_suffix(name: str) -> str:
    if name.endswith(".gz"):
        return name[: -len(".gz")]
    return name
