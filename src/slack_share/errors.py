"""Exceptions raised by slack-share."""

from typing import Optional


class SlackShareError(Exception):
    """Base class for every error slack-share raises."""


class ConfigurationError(SlackShareError):
    """Missing token or unusable configuration. Fatal at startup."""


class TransportError(SlackShareError):
    """The Slack API could not be reached."""


class RemoteAuthFailure(SlackShareError):
    """Slack rejected the credential at the HTTP level (401/403)."""


class RemoteProtocolFailure(SlackShareError):
    """The response did not match what the endpoint is documented to return."""


class RemoteApplicationFailure(SlackShareError):
    """Slack answered, but reported that the call failed."""

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.error = error


class DeliveryFailure(RemoteApplicationFailure):
    """A message could not be posted."""

    def __init__(self, message: str, error: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message, error)
        self.status_code = status_code


class WriteFailure(SlackShareError):
    """The directory cache could not be written."""
