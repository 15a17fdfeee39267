from __future__ import annotations


class KananormError(Exception):
    """Base class for errors raised by kananorm."""


class TransliterationConfigError(KananormError, ValueError):
    """Raised when a stage or recipe cannot be built from its options."""


class IvsSvsDataError(TransliterationConfigError):
    """Raised when the IVS/SVS binary table is missing or malformed."""
