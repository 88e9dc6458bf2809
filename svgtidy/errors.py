"""Exceptions raised by svgtidy."""
from typing import Optional


class SVGTidyError(Exception):
    """Base class for every error raised by the package."""


class ConfigError(SVGTidyError):
    """Invalid optimizer or pipeline configuration."""


class TokenizerError(SVGTidyError):
    """The markup could not be tokenized."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None and column is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class ParseError(SVGTidyError):
    """Structural error found while building the document tree."""


class MissingEndTag(ParseError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing {name} end tag")


class MismatchedEndTag(ParseError):
    """An end tag that does not close the innermost open element (expected is None at top level)."""

    def __init__(self, expected: Optional[str], found: str):
        self.expected = expected
        self.found = found
        if expected is None:
            super().__init__(f"Unexpected {found} end tag")
        else:
            super().__init__(f"Expected {expected} end tag, found {found}")


class MissingDocumentRoot(ParseError):
    def __init__(self):
        super().__init__("Missing document root element")


class UnderlyingStreamError(ParseError):
    """The event stream itself failed (bad bytes, I/O or decoding)."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Input stream error: {cause}")


class WriteError(SVGTidyError):
    """The output stream rejected a write."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Output stream error: {cause}")
