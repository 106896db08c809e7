"""Commands: deferred actions that produce a message for the model."""

from __future__ import annotations

import time
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from .browser import BrowserError, open_url
from .config import FeedConfig
from .messages import BatchMsg, FetchMsg, OpenURLMsg, QuitMsg, TickMsg
from .rss import Client, FeedError

Cmd = Callable[[], Any]


def fetch_all_feeds_cmd(client: Client, feeds: FeedConfig) -> Cmd:
    """A command that fetches every configured feed."""

    def fetch() -> FetchMsg:
        try:
            articles = client.fetch_multiple_feeds(feeds.feeds)
        except FeedError as exc:
            return FetchMsg(articles=[], err=exc)
        return FetchMsg(articles=articles)

    return fetch


def tick_cmd(interval: timedelta | float) -> Cmd:
    """A command that waits ``interval`` and then reports a tick."""
    seconds = interval.total_seconds() if isinstance(interval, timedelta) else float(interval)

    def tick() -> TickMsg:
        time.sleep(max(seconds, 0.0))
        return TickMsg(datetime.now())

    return tick


def open_url_cmd(url: str) -> Cmd:
    """A command that opens ``url`` in the default browser."""

    def open_() -> OpenURLMsg:
        try:
            open_url(url)
        except BrowserError as exc:
            return OpenURLMsg(url=url, err=exc)
        return OpenURLMsg(url=url)

    return open_


def quit_cmd() -> QuitMsg:
    """The command that stops the program."""
    return QuitMsg()


def batch(*args: Optional[Cmd]) -> Optional[Cmd]:
    """Combine commands into one, dropping ``None``; ``None`` if nothing is left."""
    cmds = tuple(cmd for cmd in args if cmd is not None)
    if not cmds:
        return None
    if len(cmds) == 1:
        return cmds[0]

    def run() -> BatchMsg:
        return BatchMsg(cmds)

    return run