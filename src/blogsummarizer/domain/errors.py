"""Domain errors raised by the summarize pipeline and record operations.

Each error carries the HTTP status the API layer answers with. The message is
returned to the caller verbatim as ``{"error": message}``.
"""


class SummarizerError(Exception):
    """Base class for all expected failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SummarizerError):
    """Caller input is unusable (short content, missing URL)."""

    status_code = 400


class AuthenticationError(SummarizerError):
    """No authenticated caller on the request."""

    status_code = 401


class FetchError(SummarizerError):
    """URL unreachable or answered with a non-success status."""


class ConfigurationError(SummarizerError):
    """No text-completion provider is configured."""


class ExtractionError(SummarizerError):
    """Model output could not be turned into a complete summary."""


class NotFoundError(SummarizerError):
    """No record with that id is owned by the caller.

    Kept at 500: the record endpoints do not distinguish a missing row from
    any other storage failure.
    """
