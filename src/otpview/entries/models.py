"""Entry data model — immutable records loaded once at startup."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass

_LABEL_SEPARATOR = " - "


@dataclass(frozen=True)
class Entry:
    """One authentication account.

    ``label`` may encode "Issuer - Account" in a single field. ``choice``
    is the display string and is filled in by :func:`with_choices`.
    """

    label: str
    issuer: str = ""
    secret: str = ""
    digits: int = 6
    period: int = 30
    algorithm: str = "SHA1"
    choice: str = ""


def derive_choice(entry: Entry) -> str:
    """Build the display string for an entry.

    >>> derive_choice(Entry(label="GitHub - alice"))
    'GitHub (alice)'
    >>> derive_choice(Entry(label="AWS"))
    'AWS'
    """
    parts = entry.label.split(_LABEL_SEPARATOR, 1)
    issuer = entry.issuer.strip() or parts[0]

    account = ""
    if len(parts) > 1:
        account = parts[1]
    elif entry.issuer.strip() and entry.label != issuer:
        account = entry.label

    if account:
        return f"{issuer} ({account})"
    return issuer


def with_choices(entries: Iterable[Entry]) -> list[Entry]:
    """Return copies of *entries* with ``choice`` populated."""
    return [dataclasses.replace(e, choice=derive_choice(e)) for e in entries]
