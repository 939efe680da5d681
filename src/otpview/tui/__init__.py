"""Interactive list/detail TUI for browsing TOTP entries."""

from otpview.tui.app import TuiApp, build_session
from otpview.tui.state import SessionState, ViewMode

__all__ = ["SessionState", "TuiApp", "ViewMode", "build_session"]
