"""Opening links in the system's default web browser."""

from __future__ import annotations

import subprocess
import sys


class BrowserError(Exception):
    """Raised when a URL cannot be handed to a browser."""


def _command(url: str) -> list[str]:
    platform = sys.platform
    if platform == "linux":
        return ["xdg-open", url]
    if platform == "darwin":
        return ["open", url]
    if platform == "win32":
        return ["cmd", "/c", "start", url]
    raise BrowserError(f"unsupported platform: {platform}")


def open_url(url: str) -> None:
    """Start the platform's opener for ``url`` without waiting for it."""
    command = _command(url)
    try:
        subprocess.Popen(
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as exc:
        raise BrowserError(f"failed to start {command[0]}: {exc}") from exc