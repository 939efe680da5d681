"""Session state for the interactive viewer.

The view is a tagged union: ``ListView`` while browsing and searching,
``DetailView`` while a single entry's code is shown. All mutation happens
on the event loop thread, one event at a time.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union

from otpview.entries.models import Entry

COPIED_INDICATOR_MS = 2000


class ViewMode(enum.Enum):
    """Which view the TUI is currently showing."""

    LIST = "list"
    DETAIL = "detail"


@dataclass
class ListView:
    cursor: int = 0


@dataclass
class DetailView:
    index: int
    visible: bool = False


View = Union[ListView, DetailView]


def filter_entries(entries: list[Entry], query: str) -> list[Entry]:
    """Entries whose choice contains *query*, case-insensitively."""
    needle = query.lower()
    return [e for e in entries if needle in e.choice.lower()]


@dataclass
class SessionState:
    """Mutable aggregate owned by the event loop."""

    entries: list[Entry]
    copy_enabled: bool = True
    copied_initial_ms: int = COPIED_INDICATOR_MS

    query: str = ""
    filtered: list[Entry] = field(default_factory=list)
    view: View = field(default_factory=ListView)
    copied: bool = False
    copied_remaining_ms: int = 0
    current_code: str = ""
    running: bool = True

    def __post_init__(self) -> None:
        self.filtered = filter_entries(self.entries, self.query)
        self.copied_remaining_ms = self.copied_initial_ms

    @property
    def mode(self) -> ViewMode:
        if isinstance(self.view, DetailView):
            return ViewMode.DETAIL
        return ViewMode.LIST

    @property
    def cursor(self) -> int:
        if isinstance(self.view, ListView):
            return self.view.cursor
        return self.view.index

    @property
    def selected_index(self) -> int:
        """Index into ``filtered`` of the detailed entry, or -1 in list mode."""
        if isinstance(self.view, DetailView):
            return self.view.index
        return -1

    @property
    def selected(self) -> Entry | None:
        if isinstance(self.view, DetailView):
            return self.filtered[self.view.index]
        return None

    @property
    def code_visible(self) -> bool:
        return isinstance(self.view, DetailView) and self.view.visible

    @property
    def last_index(self) -> int:
        return max(0, len(self.filtered) - 1)

    # --- List mode ---

    def set_query(self, query: str) -> None:
        """Replace the search query and recompute the filtered list."""
        self.query = query
        self.filtered = filter_entries(self.entries, query)
        self.clamp_cursor()

    def append_query(self, text: str) -> None:
        if isinstance(self.view, ListView):
            self.view.cursor = 0
        self.set_query(self.query + text)

    def backspace(self) -> None:
        if self.query:
            self.set_query(self.query[:-1])

    def move_cursor(self, delta: int) -> None:
        """Move the list cursor by *delta*, wrapping at both ends."""
        if not isinstance(self.view, ListView):
            return
        cursor = self.view.cursor + delta
        if cursor < 0:
            cursor = self.last_index
        elif cursor > self.last_index:
            cursor = 0
        self.view.cursor = cursor

    def page_up(self) -> None:
        if isinstance(self.view, ListView):
            self.view.cursor = 0

    def page_down(self) -> None:
        if isinstance(self.view, ListView):
            self.view.cursor = self.last_index

    def clamp_cursor(self) -> None:
        """Keep cursor within valid bounds for the current filtered list."""
        if isinstance(self.view, ListView):
            self.view.cursor = max(0, min(self.view.cursor, self.last_index))

    # --- Transitions ---

    def open_detail(self) -> bool:
        """Enter detail view for the entry under the cursor.

        Returns False (and changes nothing) when there is nothing to show.
        """
        if not isinstance(self.view, ListView) or not self.filtered:
            return False
        self.view = DetailView(index=self.view.cursor)
        return True

    def close_detail(self) -> None:
        """Return to the list with the search cleared, keeping the cursor position."""
        self.view = ListView(cursor=self.cursor)
        self.set_query("")
        self.current_code = ""
        self.clear_copied()

    def toggle_visible(self) -> None:
        if isinstance(self.view, DetailView):
            self.view.visible = not self.view.visible

    # --- Copy indicator ---

    def mark_copied(self) -> None:
        self.copied = True
        self.copied_remaining_ms = self.copied_initial_ms

    def clear_copied(self) -> None:
        self.copied = False
        self.copied_remaining_ms = self.copied_initial_ms

    def tick(self, elapsed_ms: int) -> None:
        """Advance the copied indicator countdown (detail view only)."""
        if not isinstance(self.view, DetailView) or not self.copied:
            return
        self.copied_remaining_ms -= max(0, elapsed_ms)
        if self.copied_remaining_ms <= 0:
            self.clear_copied()
