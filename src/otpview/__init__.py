"""otpview — terminal viewer for TOTP authentication codes."""

__version__ = "0.1.0"

APP_NAME = "otpview"
