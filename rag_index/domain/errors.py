from __future__ import annotations


class EmbeddingError(RuntimeError):
    """Raised when the embedding provider fails for a whole batch."""

    retryable = False

    def __init__(self, message: str, retryable: bool | None = None) -> None:
        super().__init__(message)
        if retryable is not None:
            self.retryable = retryable


class ProviderUnavailable(EmbeddingError):
    """Provider not configured or unreachable; callers may fall back to a non-retrieval path."""


class ProviderBatchFailure(EmbeddingError):
    """Provider answered but rejected or mangled the batch."""


class ProviderTimeout(EmbeddingError):
    """Provider did not answer within the timeout."""

    retryable = True


class IndexLoadError(RuntimeError):
    """Raised when a serialized index cannot be fetched or parsed."""

    retryable = False

    def __init__(self, message: str, retryable: bool | None = None) -> None:
        super().__init__(message)
        if retryable is not None:
            self.retryable = retryable


class IndexFetchError(IndexLoadError):
    """The content-addressed store could not deliver the payload."""


class MalformedIndexPayload(IndexLoadError, ValueError):
    """Payload bytes do not match the serialized index shape."""


class ContractError(ValueError):
    """Raised when request violates documented contract (e.g., locator format)."""
