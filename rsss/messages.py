"""Messages delivered to the interface model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from .rss import Article


@dataclass(frozen=True)
class FetchMsg:
    """The result of fetching every configured feed."""

    articles: list[Article] = field(default_factory=list)
    err: Exception | None = None


@dataclass(frozen=True)
class TickMsg:
    """A timer tick for automatic refresh."""

    time: datetime


@dataclass(frozen=True)
class SaveMsg:
    """The result of a save operation."""

    success: bool
    err: Exception | None = None


@dataclass(frozen=True)
class OpenURLMsg:
    """The result of opening a URL in the browser."""

    url: str
    err: Exception | None = None


@dataclass(frozen=True)
class KeyMsg:
    """A key press, named like ``"enter"``, ``"ctrl+c"`` or ``"a"``."""

    key: str

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class WindowSizeMsg:
    """The terminal's size in cells."""

    width: int
    height: int


@dataclass(frozen=True)
class QuitMsg:
    """A request to stop the program."""


@dataclass(frozen=True)
class BatchMsg:
    """Several commands to run at once."""

    cmds: tuple[Callable[[], Any], ...] = ()