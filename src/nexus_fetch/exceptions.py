"""Exceptions raised by nexus_fetch.

Every failure carries the process exit code the command-line interface
reports for it. Core code only raises; the CLI decides how to exit.
"""

from typing import Optional


class NexusFetchError(Exception):
    """Base exception for all nexus_fetch errors.

    Attributes:
        message: The primary error message.
        details: Optional additional context.
        exit_code: Process exit code reported by the CLI.
    """

    exit_code = 1

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class UsageError(NexusFetchError):
    """Conflicting or malformed command-line input."""

    exit_code = 2


class TransportError(NexusFetchError):
    """Network failure or unexpected HTTP status on a required call.

    Attributes:
        url: The requested URL.
        status: HTTP status code, or None if no response was received.
    """

    def __init__(
        self,
        message: str,
        url: str,
        status: Optional[int] = None,
        details: Optional[str] = None,
    ) -> None:
        self.url = url
        self.status = status
        super().__init__(message, details)


class MalformedResponseError(NexusFetchError):
    """A response body does not have the expected shape."""


class TooManyArtifactsError(NexusFetchError):
    """A search matched more artifacts than the configured maximum."""


class TruncatedSearchError(NexusFetchError):
    """The server truncated the search result and truncation is fatal."""

    exit_code = 3


class NothingFoundError(NexusFetchError):
    """Nothing was found or resolved and an empty result is fatal."""

    exit_code = 4


class PersistError(NexusFetchError):
    """A downloaded body could not be written to disk.

    Attributes:
        path: The path that could not be written.
    """

    def __init__(self, message: str, path: str, details: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message, details)
