"""Exception hierarchy shared by the ingestion pipeline and the gene books."""


class SyntenyBookError(Exception):
    """Base class for every error raised by syntenybook."""


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(SyntenyBookError, ValueError):
    """Invalid settings; a ValueError so pydantic validators report it."""


class InvalidRegexError(ConfigurationError):
    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"{pattern!r} is not a valid regex: {reason}")


class MissingCaptureGroupError(ConfigurationError):
    def __init__(self, group: str, pattern: str):
        self.group = group
        self.pattern = pattern
        super().__init__(f"capture group {group!r} missing in {pattern!r}")


# ---------------------------------------------------------------------------
# File errors
# ---------------------------------------------------------------------------

class FileError(SyntenyBookError):
    pass


class CannotOpenFileError(FileError):
    def __init__(self, filename: str, reason: str = ""):
        self.filename = filename
        super().__init__(f"failed to open {filename}" + (f": {reason}" if reason else ""))


class ReadError(FileError):
    def __init__(self, filename: str, reason: str = ""):
        self.filename = filename
        super().__init__(f"failed to read {filename}" + (f": {reason}" if reason else ""))


class InvalidFilenameError(FileError):
    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"invalid filename: {filename}")


# ---------------------------------------------------------------------------
# Data errors
# ---------------------------------------------------------------------------

class DataError(SyntenyBookError):
    pass


class SpeciesNotFoundError(DataError):
    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(
            f"the provided regex did not match any species name in {filename}"
        )


class IdNotFoundError(DataError):
    def __init__(self, raw_id: str):
        self.raw_id = raw_id
        super().__init__(f"the provided regex did not match any ID in {raw_id}")


class RecordWithoutIdError(DataError):
    def __init__(self, location: str):
        self.location = location
        super().__init__(f"record {location} has no ID")


class UnsupportedFileTypeError(DataError):
    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"unable to process {filename}: unknown filetype")


class FailedToConnectError(DataError):
    def __init__(self, filename: str, reason: str = ""):
        self.filename = filename
        super().__init__(
            f"failed to connect to database {filename}" + (f": {reason}" if reason else "")
        )


# ---------------------------------------------------------------------------
# Decoder errors
# ---------------------------------------------------------------------------

class DecodeError(SyntenyBookError):
    """A line of an annotation file could not be decoded."""

    def __init__(self, message: str, line: str):
        self.line = line
        super().__init__(f"{message}: {line}")


class GffError(DecodeError):
    pass


class BedError(DecodeError):
    pass


class ChromTableError(DecodeError):
    pass


# ---------------------------------------------------------------------------
# Gene book errors
# ---------------------------------------------------------------------------

class UnknownIdError(SyntenyBookError, LookupError):
    def __init__(self, gene_id: str):
        self.gene_id = gene_id
        super().__init__(f"ID {gene_id} not found in the specified database")


class ImmutableBookError(SyntenyBookError):
    def __init__(self):
        super().__init__("inline gene books can not be accessed mutably")


class BookClosedError(SyntenyBookError):
    def __init__(self):
        super().__init__("the gene book has been closed")
