"""Exception hierarchy shared across otpview."""

from __future__ import annotations


class OtpViewError(Exception):
    """Base class for all otpview errors."""


class ConfigError(OtpViewError):
    """An environment override could not be parsed."""


class EntryLoadError(OtpViewError):
    """The entry source is unreadable, malformed, or holds a bad secret."""


class ClipboardError(OtpViewError):
    """The system clipboard is not usable."""


class CopyVerificationError(ClipboardError):
    """Read-back of a copied code did not match what was written."""
