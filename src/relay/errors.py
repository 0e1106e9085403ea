"""Provider-side failures raised by the Kimi client."""


class ProviderError(Exception):
    """Base class for any failed round trip to the provider."""


class ProviderStatusError(ProviderError):
    """Provider answered with a non-success status.

    Attributes:
        status_code: HTTP status returned by the provider.
        body: Raw response body, kept for diagnostics only.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Provider returned HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class UploadFailed(ProviderStatusError):
    """File upload endpoint returned a non-success status."""


class CompletionFailed(ProviderStatusError):
    """Chat completion endpoint returned a non-success status."""


class MalformedProviderResponse(ProviderError):
    """Provider response is missing the fields we read from it."""


class ProviderUnavailable(ProviderError):
    """Provider could not be reached (connection error, timeout)."""
