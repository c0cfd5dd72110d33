# Common utilities and shared modules
"""
Shared components used by every package:
- Data models (Pydantic schemas)
- Exception hierarchy
- Logging configuration
- Project configuration
"""

from .config import Settings, PROJECT_ROOT, DATA_DIR
from .errors import (
    ConfigurationError,
    EmptyResponseError,
    GenerationError,
    GenerationServiceError,
    InputValidationError,
    MalformedResponseError,
    PSCMSError,
    PostNotFoundError,
    PostStoreError,
)
from .logging import setup_logging

__all__ = [
    "Settings",
    "PROJECT_ROOT",
    "DATA_DIR",
    "ConfigurationError",
    "EmptyResponseError",
    "GenerationError",
    "GenerationServiceError",
    "InputValidationError",
    "MalformedResponseError",
    "PSCMSError",
    "PostNotFoundError",
    "PostStoreError",
    "setup_logging",
]
