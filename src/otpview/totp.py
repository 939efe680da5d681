"""TOTP code generation backed by pyotp."""

from __future__ import annotations

import hashlib

import pyotp

from otpview.entries.models import Entry

_DIGESTS = {
    "SHA1": hashlib.sha1,
    "SHA256": hashlib.sha256,
    "SHA512": hashlib.sha512,
}


def generate_totp(entry: Entry, now: float) -> tuple[str, int]:
    """Return the code valid at *now* and the epoch second it expires."""
    totp = pyotp.TOTP(
        entry.secret,
        digits=entry.digits,
        digest=_DIGESTS.get(entry.algorithm, hashlib.sha1),
        interval=entry.period,
    )
    code = totp.at(int(now))
    expiry = (int(now) // entry.period + 1) * entry.period
    return code, expiry
