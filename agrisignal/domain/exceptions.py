"""Centralized exception hierarchy for agrisignal.

All engine exceptions inherit from :class:`AgriSignalError` so that callers
can catch a single base class when they need a broad safety net, yet still
match on specific subclasses where narrower handling is appropriate.

Hierarchy
---------
::

    AgriSignalError (base)
    ├── ValidationError          (bad input from caller)
    │   └── ImageDecodeError     (image cannot be decoded or sampled)
    └── ConfigurationError       (invalid range / band / weight tables)

Absent and unconfigured metrics are *not* errors; the scoring components
degrade to their documented defaults instead of raising.
"""

from __future__ import annotations


class AgriSignalError(Exception):
    """Base exception for all agrisignal errors.

    Parameters
    ----------
    message:
        Human-readable description.
    detail:
        Optional machine-readable context dict attached to the error for
        structured logging.
    """

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


class ValidationError(AgriSignalError):
    """Caller supplied invalid or incomplete input."""


class ImageDecodeError(ValidationError):
    """Image data could not be decoded into an RGB pixel grid."""


class ConfigurationError(AgriSignalError):
    """Missing or invalid metric configuration."""
