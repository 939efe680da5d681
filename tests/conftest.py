"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from otpview.entries.models import Entry, with_choices
from otpview.tui.state import SessionState

GITHUB_SECRET = "JBSWY3DPEHPK3PXP"
AWS_SECRET = "KRSXG5CTMVRXEZLU"


class FakeClipboard:
    """In-memory clipboard; ``corrupt`` makes read-back differ from writes."""

    def __init__(self, available: bool = True, corrupt: bool = False) -> None:
        self.available = available
        self.corrupt = corrupt
        self.contents = ""
        self.writes: list[str] = []

    def init(self) -> None:
        from otpview.errors import ClipboardError

        if not self.available:
            raise ClipboardError("no clipboard mechanism")

    def write(self, text: str) -> None:
        self.writes.append(text)
        self.contents = text

    def read(self) -> str:
        if self.corrupt:
            return self.contents[::-1] + "x"
        return self.contents


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def fixed_generator(code: str = "123456", expiry: int = 1_000_020):
    def generate(entry: Entry, now: float) -> tuple[str, int]:
        return code, expiry

    return generate


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def raw_entries() -> list[Entry]:
    return [
        Entry(label="GitHub - alice", secret=GITHUB_SECRET),
        Entry(label="AWS", secret=AWS_SECRET),
    ]


@pytest.fixture
def entries(raw_entries: list[Entry]) -> list[Entry]:
    return with_choices(raw_entries)


@pytest.fixture
def many_entries() -> list[Entry]:
    labels = ["GitHub - alice", "GitLab - bob", "AWS", "Google - carol", "Dropbox"]
    return with_choices(Entry(label=label, secret=GITHUB_SECRET) for label in labels)


@pytest.fixture
def state(entries: list[Entry]) -> SessionState:
    return SessionState(entries=entries)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_clipboard():
    return FakeClipboard


@pytest.fixture
def generator():
    return fixed_generator()
