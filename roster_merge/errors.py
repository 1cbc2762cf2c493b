"""Error taxonomy for request-level failures.

Per-line parsing problems are never raised; a line that cannot be parsed is
skipped. Only whole-input conditions surface as exceptions.
"""


class RosterMergeError(Exception):
    """Base class for all request-level failures."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingInputError(RosterMergeError):
    """A required file or reference list is absent."""

    kind = "missing_input"


class MalformedInputError(RosterMergeError):
    """Reference JSON or byte content cannot be decoded."""

    kind = "malformed_input"


class UnsupportedFormatError(MalformedInputError):
    """The uploaded file type is not one the parser understands."""

    kind = "unsupported_format"


class UploadTooLargeError(RosterMergeError):
    """An uploaded file exceeds the configured size limit."""

    kind = "too_large"


class ZeroYieldError(RosterMergeError):
    """A parser finished but extracted no usable records.

    Usually a layout heuristic mismatch rather than a bug; the user is asked
    to check the document formatting.
    """

    kind = "zero_yield"


class DecoderError(RosterMergeError):
    """The underlying document decoder raised."""

    kind = "decoder_failure"


class PDFExtractionError(DecoderError):
    """Error during PDF extraction."""

    pass


class SpreadsheetExtractionError(DecoderError):
    """Error while reading a CSV / Excel file."""

    pass
