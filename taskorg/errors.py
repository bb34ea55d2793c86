"""Error types raised by the decomposition core."""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when a required field is missing or a field value is invalid.

    The message always names the violated constraint so it can be shown to
    the caller as-is. Validation failures are permanent for the given input.
    """
