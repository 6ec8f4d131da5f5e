"""Error types surfaced by the Salesforce request layer.

The dispatcher never raises for HTTP-level failures; it reports them as
normalized results. These exceptions are what the retry orchestrator turns
each terminal failure into, so callers can tell a credential refresh that
could not happen apart from a remote service that keeps failing.
"""

from __future__ import annotations


class SalesforceError(Exception):
    """Base exception for the request layer."""


class ActionFailedError(SalesforceError):
    """The first attempt failed with a status other than 401."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"action errored with status {status_code}")
        self.status_code = status_code


class RetryArgsUnavailableError(SalesforceError):
    """The retry-args provider could not supply refreshed arguments."""

    def __init__(self) -> None:
        super().__init__("failed to obtain retry arguments")


class RetryExhaustedError(SalesforceError):
    """The single retry after a 401 failed as well.

    Raised for any status on the second attempt, a repeated 401 included.
    """

    def __init__(self, status_code: int) -> None:
        super().__init__(f"errored after retry with status {status_code}")
        self.status_code = status_code


class MalformedResponseError(SalesforceError):
    """A 2xx response carried a body that is not valid JSON."""

    def __init__(self, status_code: int, text: str) -> None:
        super().__init__(f"malformed JSON body in response with status {status_code}")
        self.status_code = status_code
        self.text = text


class ConfigurationError(SalesforceError):
    """Required configuration is missing or invalid."""


__all__ = [
    "SalesforceError",
    "ActionFailedError",
    "RetryArgsUnavailableError",
    "RetryExhaustedError",
    "MalformedResponseError",
    "ConfigurationError",
]
