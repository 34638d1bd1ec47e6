"""Error taxonomy shared by the providers, the pipeline and the routes."""
from typing import Optional


class ClientInputError(ValueError):
    """Required request field missing or empty after normalization.

    The only error kind that reaches the HTTP caller (as a 400).
    """

    def __init__(self, message: str = "No text provided"):
        super().__init__(message)
        self.message = message


class ProviderError(RuntimeError):
    """Base class for failures raised by a provider client."""

    def __init__(self, provider: str, detail: str):
        super().__init__(f"{provider}: {detail}")
        self.provider = provider
        self.detail = detail


class MissingCredential(ProviderError):
    """Provider has no API key configured."""


class TransportError(ProviderError):
    """Network failure, timeout, non-2xx status or unreadable envelope."""

    def __init__(self, provider: str, detail: str, status_code: Optional[int] = None):
        super().__init__(provider, detail)
        self.status_code = status_code
