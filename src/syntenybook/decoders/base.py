"""Common machinery for line-oriented annotation readers."""

from pathlib import Path
from typing import Iterator, Union

from syntenybook.decoders.open import open_annotation
from syntenybook.decoders.records import AnnotationRecord
from syntenybook.errors import ReadError


class LineReader:
    """
    Restartable, forward-only reader over an annotation file.

    Every iteration re-opens the file, skips blank lines and `#` comments,
    and decodes the remaining lines one at a time with `parse_line`.
    """

    format_name = "annotation"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def parse_line(self, line: str) -> AnnotationRecord:
        raise NotImplementedError

    def __iter__(self) -> Iterator[AnnotationRecord]:
        with open_annotation(self.path) as handle:
            try:
                for line in handle:
                    line = line.rstrip("\r\n")
                    if not line or line.startswith("#"):
                        continue
                    yield self.parse_line(line)
            except (OSError, EOFError, UnicodeDecodeError) as e:
                raise ReadError(str(self.path), str(e)) from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"
