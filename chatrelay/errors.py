"""Exception types raised across the provider boundary."""

from __future__ import annotations


class ChatRelayError(RuntimeError):
    """Base class for every error raised by chatrelay."""


class ProviderCallError(ChatRelayError):
    """Raised when a vendor call cannot be issued or is rejected.

    Covers transport failures, non-success HTTP statuses, vendor-reported API
    errors and request construction failures. The original vendor exception,
    if any, is chained as ``__cause__``.
    """

    def __init__(self, vendor: str, message: str) -> None:
        self.vendor = vendor
        self.message = message
        super().__init__(f"{vendor} API Error: {message}")


class ImageFetchError(ProviderCallError):
    """Raised when an image cannot be fetched or encoded for inline upload."""


class StreamProcessingError(ChatRelayError):
    """Raised while iterating a vendor stream after the call succeeded."""

    def __init__(self, vendor: str, message: str) -> None:
        self.vendor = vendor
        self.message = message
        super().__init__(f"{vendor} Stream Processing Error: {message}")
