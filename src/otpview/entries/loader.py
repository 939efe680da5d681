"""Load Entry records from YAML, JSON, or otpauth URI files."""

from __future__ import annotations

import binascii
import json
import logging
from pathlib import Path
from urllib.parse import parse_qs, unquote, urlparse

import pyotp
import yaml

from otpview.entries.models import Entry
from otpview.errors import EntryLoadError

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")
_ALGORITHMS = ("SHA1", "SHA256", "SHA512")


def load_entries(path: str | Path) -> list[Entry]:
    """Load entries from *path*, choosing the format by file suffix.

    ``.yaml``, ``.yml`` and ``.json`` files hold a list of mappings (or a
    mapping with an ``entries`` key). Anything else is read as one
    ``otpauth://`` URI per line.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise EntryLoadError(f"Cannot read {path}: {e.strerror or e}") from e

    suffix = path.suffix.lower()
    if suffix == ".json":
        entries = load_entries_from_json(text)
    elif suffix in _YAML_SUFFIXES:
        entries = load_entries_from_string(text)
    else:
        entries = _parse_uri_lines(text)

    logger.debug("Loaded %d entries from %s", len(entries), path)
    return entries


def load_entries_from_string(text: str) -> list[Entry]:
    """Parse a YAML document into entries."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise EntryLoadError(f"Malformed entry file: {e}") from e
    return _entries_from_data(data)


def load_entries_from_json(text: str) -> list[Entry]:
    """Parse a JSON document into entries."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise EntryLoadError(f"Malformed JSON entry file: {e}") from e
    return _entries_from_data(data)


def _entries_from_data(data: object) -> list[Entry]:
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("entries", [])
    if not isinstance(data, list):
        raise EntryLoadError("Entry file must be a list of entries")

    entries: list[Entry] = []
    for i, item in enumerate(data):
        if isinstance(item, str):
            entries.append(parse_otpauth_uri(item))
            continue
        if not isinstance(item, dict):
            raise EntryLoadError(f"Entry #{i + 1} must be a mapping")
        entries.append(_build_entry(item, position=i + 1))
    return entries


def parse_otpauth_uri(uri: str) -> Entry:
    """Parse an ``otpauth://totp/Issuer:account?secret=...`` URI."""
    parsed = urlparse(uri.strip())
    if parsed.scheme != "otpauth":
        raise EntryLoadError(f"Not an otpauth URI: {uri!r}")
    if parsed.netloc.lower() != "totp":
        raise EntryLoadError(f"Unsupported OTP type: {parsed.netloc!r}")

    params = {k: v[0] for k, v in parse_qs(parsed.query).items()}
    path_label = unquote(parsed.path.lstrip("/"))

    issuer = params.get("issuer", "")
    account = path_label
    if ":" in path_label:
        prefix, account = path_label.split(":", 1)
        issuer = issuer or prefix
    account = account.strip()

    label = f"{issuer} - {account}" if issuer and account else (account or issuer)
    return _build_entry(
        {
            "label": label,
            "issuer": issuer,
            "secret": params.get("secret", ""),
            "digits": params.get("digits", 6),
            "period": params.get("period", 30),
            "algorithm": params.get("algorithm", "SHA1"),
        },
        position=label or uri,
    )


def _parse_uri_lines(text: str) -> list[Entry]:
    entries: list[Entry] = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(parse_otpauth_uri(line))
    return entries


def _build_entry(data: dict, position: object) -> Entry:
    secret = str(data.get("secret", "")).replace(" ", "").upper()
    if not secret:
        raise EntryLoadError(f"Entry {position} has no secret")
    _validate_secret(secret, position)

    issuer = str(data.get("issuer") or "").strip()
    label = str(data.get("label") or data.get("name") or issuer).strip()

    algorithm = str(data.get("algorithm", "SHA1")).upper()
    if algorithm not in _ALGORITHMS:
        raise EntryLoadError(f"Entry {position} uses unsupported algorithm {algorithm}")

    try:
        digits = int(data.get("digits", 6))
        period = int(data.get("period", 30))
    except (TypeError, ValueError) as e:
        raise EntryLoadError(f"Entry {position} has invalid digits/period") from e
    if not 6 <= digits <= 10 or period <= 0:
        raise EntryLoadError(f"Entry {position} has invalid digits/period")

    return Entry(
        label=label,
        issuer=issuer,
        secret=secret,
        digits=digits,
        period=period,
        algorithm=algorithm,
    )


def _validate_secret(secret: str, position: object) -> None:
    try:
        pyotp.TOTP(secret).byte_secret()
    except (binascii.Error, ValueError) as e:
        raise EntryLoadError(f"Entry {position} has an invalid base32 secret") from e
