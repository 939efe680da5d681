"""TUI application — event loop driving list, search and detail views."""

from __future__ import annotations

import logging
import signal
import time
from collections.abc import Callable, Iterable

from rich.console import Console
from rich.live import Live

from otpview.clipboard import Clipboard, copy_verified
from otpview.config import OtpViewConfig
from otpview.entries.models import Entry, with_choices
from otpview.errors import ClipboardError, CopyVerificationError
from otpview.totp import generate_totp
from otpview.tui.display import THEME, Generator, SessionDisplay
from otpview.tui.input import KeyboardInput
from otpview.tui.state import SessionState, ViewMode

logger = logging.getLogger(__name__)


def build_session(
    entries: Iterable[Entry],
    config: OtpViewConfig,
    clipboard: Clipboard | None,
) -> SessionState:
    """Create the session state, disabling copy if the clipboard is unusable."""
    copy_enabled = config.copy_enabled and clipboard is not None
    if copy_enabled:
        try:
            clipboard.init()
        except ClipboardError as e:
            logger.warning("clipboard: %s", e)
            copy_enabled = False

    return SessionState(
        entries=with_choices(entries),
        copy_enabled=copy_enabled,
        copied_initial_ms=config.copied_indicator_ms,
    )


class TuiApp:
    """Interactive viewer for a set of TOTP entries.

    Single-threaded: each key press and each tick is handled to completion
    before the frame is re-rendered.
    """

    def __init__(
        self,
        state: SessionState,
        display: SessionDisplay,
        clipboard: Clipboard | None = None,
        generate: Generator = generate_totp,
        clock: Callable[[], float] = time.time,
        tick_interval: float = 0.05,
        console: Console | None = None,
    ) -> None:
        self._state = state
        self._display = display
        self._clipboard = clipboard
        self._generate = generate
        self._clock = clock
        self._tick_interval = tick_interval
        self._last_tick = clock()
        self._console = console or Console(theme=THEME)

    @property
    def state(self) -> SessionState:
        return self._state

    def run(self) -> None:
        """Run the TUI main loop. Blocks until the session ends.

        Raises CopyVerificationError after restoring the terminal if a
        copied code could not be verified.
        """
        state = self._state

        original_sigint = signal.getsignal(signal.SIGINT)
        original_sigterm = signal.getsignal(signal.SIGTERM)

        def _signal_handler(signum: int, frame: object) -> None:
            state.running = False

        signal.signal(signal.SIGINT, _signal_handler)
        signal.signal(signal.SIGTERM, _signal_handler)

        try:
            with KeyboardInput() as kb:
                with Live(
                    console=self._console,
                    screen=True,
                    auto_refresh=False,
                ) as live:
                    live.update(self._render(), refresh=True)
                    while state.running:
                        key = kb.read(timeout=self._tick_interval)
                        if key is not None:
                            self.dispatch_key(key)
                        if not state.running:
                            break
                        self.tick()
                        live.update(self._render(), refresh=True)
        except CopyVerificationError:
            self._console.clear()
            raise
        except Exception:
            logger.exception("TUI error")
            raise
        finally:
            signal.signal(signal.SIGINT, original_sigint)
            signal.signal(signal.SIGTERM, original_sigterm)

        self._console.clear()

    def _render(self):
        return self._display.render(self._state, self._clock())

    def dispatch_key(self, key: str) -> None:
        state = self._state

        # Global keys
        if key == "ctrl+c":
            state.running = False
            return

        if state.mode == ViewMode.DETAIL:
            self._handle_detail_key(key)
        else:
            self._handle_list_key(key)

    def _handle_list_key(self, key: str) -> None:
        state = self._state

        if key == "escape":
            if state.query:
                state.set_query("")
            else:
                state.running = False
        elif key == "up":
            state.move_cursor(-1)
        elif key == "down":
            state.move_cursor(1)
        elif key == "pgup":
            state.page_up()
        elif key == "pgdown":
            state.page_down()
        elif key == "enter":
            if state.open_detail():
                self._refresh_code()
        elif key == "backspace":
            state.backspace()
        elif len(key) == 1 and key.isprintable():
            state.append_query(key)

    def _handle_detail_key(self, key: str) -> None:
        state = self._state

        if key == "escape":
            state.close_detail()
        elif key == "enter":
            state.toggle_visible()
        elif key == "q":
            state.running = False
        elif key == "c":
            self._copy_code()

    def _copy_code(self) -> None:
        state = self._state
        if not state.copy_enabled or self._clipboard is None or not state.current_code:
            return
        try:
            copy_verified(self._clipboard, state.current_code)
        except CopyVerificationError:
            state.running = False
            raise
        except ClipboardError as e:
            logger.warning("copy: %s; disabling copy", e)
            state.copy_enabled = False
            return
        state.mark_copied()

    def tick(self) -> None:
        """Advance timers by the wall-clock time since the previous tick."""
        now = self._clock()
        elapsed_ms = int((now - self._last_tick) * 1000)
        self._last_tick = now
        self._state.tick(elapsed_ms)
        if self._state.mode == ViewMode.DETAIL:
            self._refresh_code(now)

    def _refresh_code(self, now: float | None = None) -> None:
        entry = self._state.selected
        if entry is None:
            return
        code, _expiry = self._generate(entry, self._clock() if now is None else now)
        self._state.current_code = code
