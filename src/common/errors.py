"""Exception hierarchy shared by the generator, the post store and the dashboard."""

from __future__ import annotations


class PSCMSError(Exception):
    """Root of all application errors."""

    def __init__(self, message: str = "", detail: str = ""):
        self.detail = detail
        super().__init__(message)


class ConfigurationError(PSCMSError):
    """Required credentials or settings are missing."""


class InputValidationError(PSCMSError):
    """A required request field is missing or blank."""


# --- Content generation ---

class GenerationError(PSCMSError):
    """Content generation failed; no partial result is available."""


class GenerationServiceError(GenerationError):
    """The LLM call failed outright (transport error, timeout, non-success status)."""


class EmptyResponseError(GenerationError):
    """The LLM call succeeded but returned no text."""


class MalformedResponseError(GenerationError):
    """The LLM returned text that is not valid JSON."""


# --- Persistence ---

class PostStoreError(PSCMSError):
    """A datastore operation failed."""


class PostNotFoundError(PostStoreError):
    """No post exists with the requested id."""
