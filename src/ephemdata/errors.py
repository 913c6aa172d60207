"""
Exception hierarchy for ephemdata.

Errors are grouped by failure domain so callers can decide whether to skip a
resource ("not supported") or abort ("corrupted").
"""


class EphemDataError(Exception):
    """Base exception for all library errors."""
    pass


# --- Configuration Errors ---

class DataConfigurationError(EphemDataError):
    """Raised when a data root, archive, resource or URL cannot be used."""
    pass


class ParserConfigurationError(EphemDataError):
    """Raised when a parser is configured with incompatible settings."""
    pass


# --- Format Errors ---

class DataFormatError(EphemDataError):
    """Base class for errors related to the content of a data resource."""
    pass


class UnsupportedFormatError(DataFormatError):
    """Raised when a resource is not in the format a reader expects."""

    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.name = name


class CorruptedFileError(DataFormatError, OSError):
    """Raised when a resource in a supported format cannot be decoded."""

    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.name = name

    def __str__(self) -> str:
        return self.args[0]


class LineParseError(DataFormatError):
    """Raised when a line of a text resource cannot be parsed."""

    def __init__(self, line_number: int, name: str, line: str):
        super().__init__(
            f"unable to parse line {line_number} of file {name}:\n{line}"
        )
        self.line_number = line_number
        self.name = name
        self.line = line


class MissingSeriesError(DataFormatError):
    """Raised when a degree section of a Poisson series file is missing."""

    def __init__(self, degree: int, name: str, line_number: int):
        super().__init__(
            f"missing serie j = {degree} in file {name} (line {line_number})"
        )
        self.degree = degree
        self.name = name
        self.line_number = line_number


# --- Loading Errors ---

class DataLoadingError(EphemDataError):
    """
    Raised when a loader fails while consuming a data source.

    The message is the original error message and the original error is
    chained as ``__cause__``.
    """
    pass
