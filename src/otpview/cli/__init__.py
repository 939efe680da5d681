"""CLI entry point — ``otpview FILENAME``."""

from __future__ import annotations

import logging

import click

from otpview import APP_NAME, __version__
from otpview.clipboard import Clipboard
from otpview.config import OtpViewConfig
from otpview.entries.loader import load_entries
from otpview.errors import CopyVerificationError, OtpViewError
from otpview.totp import generate_totp
from otpview.tui.app import TuiApp, build_session
from otpview.tui.display import SessionDisplay


@click.command()
@click.version_option(version=__version__, prog_name=APP_NAME)
@click.argument("filename", type=click.Path(exists=True, dir_okay=False))
@click.option("--no-copy", is_flag=True, help="Disable copying codes to the clipboard.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
def main(filename: str, no_copy: bool, verbose: bool) -> None:
    """otpview — browse TOTP codes stored in FILENAME."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = OtpViewConfig.load()
        entries = load_entries(filename)
    except OtpViewError as e:
        raise click.ClickException(str(e)) from e

    config.verbose = verbose
    if no_copy:
        config.copy_enabled = False

    clipboard = Clipboard() if config.copy_enabled else None
    state = build_session(entries, config, clipboard)
    display = SessionDisplay(filename, generate=generate_totp, mask=config.mask)
    app = TuiApp(
        state,
        display,
        clipboard=clipboard,
        tick_interval=config.tick_interval,
    )

    try:
        app.run()
    except CopyVerificationError as e:
        raise click.ClickException(f"copy failed: {e}") from e
