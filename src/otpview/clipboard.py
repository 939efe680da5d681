"""System clipboard access via pyperclip."""

from __future__ import annotations

import logging

import pyperclip

from otpview.errors import ClipboardError, CopyVerificationError

logger = logging.getLogger(__name__)


class Clipboard:
    """Thin wrapper over pyperclip that reports failures as ClipboardError."""

    def init(self) -> None:
        """Probe the clipboard without changing its contents."""
        try:
            pyperclip.paste()
        except pyperclip.PyperclipException as e:
            raise ClipboardError(str(e)) from e

    def write(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(str(e)) from e

    def read(self) -> str:
        try:
            return pyperclip.paste()
        except pyperclip.PyperclipException as e:
            raise ClipboardError(str(e)) from e


def copy_verified(clipboard: Clipboard, text: str) -> None:
    """Write *text* and read it back; a mismatch is unrecoverable."""
    clipboard.write(text)
    if clipboard.read().encode("utf-8") != text.encode("utf-8"):
        logger.error("copy: clipboard read-back did not match")
        raise CopyVerificationError("Clipboard contents did not match the copied code")
