"""TUI display — builds a Rich Text frame from SessionState."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from rich.text import Text
from rich.theme import Theme

from otpview import APP_NAME, __version__
from otpview.entries.models import Entry
from otpview.tui.state import SessionState, ViewMode

Generator = Callable[[Entry, float], tuple[str, int]]

THEME = Theme(
    {
        "success": "green",
        "warning": "yellow",
        "danger": "bold red",
        "muted": "dim",
        "emphasis": "bold white",
    }
)

_WARNING_SECONDS = 10
_DANGER_SECONDS = 5


def urgency(remaining: int) -> str:
    """Style role for a code with *remaining* seconds of validity."""
    if remaining <= _DANGER_SECONDS:
        return "danger"
    if remaining <= _WARNING_SECONDS:
        return "warning"
    return "normal"


def format_code(code: str, visible: bool, mask: str = "******") -> str:
    """Mask the code unless *visible*, then split it into two halves."""
    shown = code if visible else mask
    half = len(shown) // 2
    return f"{shown[:half]} {shown[half:]}"


class SessionDisplay:
    """Renders the header, body and footer for the current state."""

    def __init__(self, filename: str, generate: Generator, mask: str = "******") -> None:
        self._title = f"{APP_NAME} v{__version__}: {Path(filename).name}"
        self._generate = generate
        self._mask = mask

    def render(self, state: SessionState, now: float) -> Text:
        """Build the full frame. Has no effect on *state*."""
        frame = self._render_header(state)
        if state.mode == ViewMode.DETAIL:
            frame.append_text(self._render_detail(state, now))
        else:
            frame.append_text(self._render_list(state))
        frame.append_text(self._render_footer(state))
        return frame

    def _render_header(self, state: SessionState) -> Text:
        count = len(state.filtered)
        noun = "entry" if count == 1 else "entries"

        header = Text()
        header.append(f"{self._title}\n")
        header.append("=" * len(self._title) + "\n")
        header.append(f"{count} {noun}.\n")
        if state.mode != ViewMode.DETAIL:
            header.append("\nType to search: ")
            header.append(state.query, style="emphasis")
            header.append("\n\n")
        return header

    def _render_list(self, state: SessionState) -> Text:
        body = Text()
        for i, entry in enumerate(state.filtered):
            if i == state.cursor:
                body.append("> ", style="success")
                body.append(" ")
                body.append(entry.choice, style="emphasis")
            else:
                body.append("  ")
                body.append(entry.choice)
            body.append("\n")
        return body

    def _render_detail(self, state: SessionState, now: float) -> Text:
        entry = state.selected
        if entry is None:
            return Text()

        code, expiry = self._generate(entry, now)
        remaining = expiry - int(now)
        level = urgency(remaining)
        code_style = "success" if level == "normal" else level
        until_style = "emphasis" if level == "normal" else level

        body = Text()
        body.append(f"\n{entry.choice}: ")
        body.append(format_code(code, state.code_visible, self._mask), style=code_style)
        if state.copied:
            body.append(" ✓ ", style="success")
        body.append("\nValid: ")
        body.append(f"{remaining}s", style=until_style)
        body.append("\n")
        return body

    def _render_footer(self, state: SessionState) -> Text:
        if state.mode == ViewMode.DETAIL:
            footer = "[esc] back | [q] quit | [enter] toggle visibility"
            if state.copy_enabled:
                footer += " | [c] copy"
        else:
            footer = "[esc] clear search" if state.query else "[esc] quit"
            if state.filtered:
                footer += " | [enter] view"
        return Text(f"\n{footer}\n", style="muted")
