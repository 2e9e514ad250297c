from __future__ import annotations


class RelayError(Exception):
    """Base class for errors returned by the chat relay as ``{"error": ...}``."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequest(RelayError):
    """The request is missing a required field. The caller must fix its input."""

    status_code = 400


class ConfigurationError(RelayError):
    """The deployment is misconfigured (e.g. no provider credential)."""

    status_code = 500


class ProviderError(RelayError):
    """The upstream chat-completion call failed, threw or timed out."""

    status_code = 500
