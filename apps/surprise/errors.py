"""Exceptions raised while handling a slash command.

The HTTP layer translates each of them into a status code; nothing below
:mod:`apps.surprise.main` knows about HTTP.
"""


class SurpriseError(Exception):
    """Base class for all surprise service failures."""


class MalformedRequest(SurpriseError):
    """``token`` or ``command`` is absent from the form."""


class Unauthorized(SurpriseError):
    """The presented token does not match the shared secret."""


class ProviderError(SurpriseError):
    """A content provider could not produce an attachment."""

    def __init__(self, provider: str, reason: str = "lookup failed") -> None:
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason


__all__ = ["SurpriseError", "MalformedRequest", "Unauthorized", "ProviderError"]
