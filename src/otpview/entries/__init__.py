"""Entry records and the file-backed entry store."""

from otpview.entries.loader import load_entries, parse_otpauth_uri
from otpview.entries.models import Entry, derive_choice, with_choices

__all__ = ["Entry", "derive_choice", "load_entries", "parse_otpauth_uri", "with_choices"]
