"""Application settings, feed list and seen-article persistence."""

from __future__ import annotations

import json
from contextlib import suppress
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any

from .rss import FeedInfo

_DEFAULT_FEEDS = (
    ("BBC News", "https://feeds.bbci.co.uk/news/rss.xml"),
    ("TechCrunch", "https://techcrunch.com/feed/"),
)

_HTML_ESCAPES = (
    ("&", "\\u0026"),
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _write_json(filename: str | Path, payload: Any, *, sort_keys: bool = False) -> None:
    path = Path(filename)
    path.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
    text = json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=sort_keys)
    for char, escape in _HTML_ESCAPES:
        text = text.replace(char, escape)
    path.write_text(text, encoding="utf-8")


def _read_json(filename: str | Path) -> Any:
    return json.loads(Path(filename).read_bytes())


def _decode_object(data: Any, what: str) -> dict[str, Any]:
    """Return a JSON object's members keyed by lower-cased name."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"cannot decode {type(data).__name__} into {what}")
    return {key.lower(): value for key, value in data.items()}


def _expect(value: Any, kind: type, key: str) -> Any:
    if kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool)
    else:
        valid = isinstance(value, kind)
    if not valid:
        raise ValueError(
            f"cannot decode {type(value).__name__} into field {key!r} of type {kind.__name__}"
        )
    return value


def _get(obj: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = obj.get(key)
    if value is None:
        return default
    return _expect(value, kind, key)


def _nanoseconds(duration: timedelta) -> int:
    return (duration // timedelta(microseconds=1)) * 1000


@dataclass
class Config:
    """Application settings."""

    refresh_rate: timedelta = timedelta(minutes=5)
    feeds_file: str = ""
    color_theme: str = "default"
    seen_articles_file: str = ""
    enable_notifications: bool = True
    config_file: str = ""

    def _update(self, data: Any) -> None:
        obj = _decode_object(data, "configuration")
        nanoseconds = _get(obj, "refresh_rate", int, None)
        if nanoseconds is not None:
            self.refresh_rate = timedelta(microseconds=nanoseconds // 1000)
        self.feeds_file = _get(obj, "feeds_file", str, self.feeds_file)
        self.color_theme = _get(obj, "color_theme", str, self.color_theme)
        self.seen_articles_file = _get(
            obj, "seen_articles_file", str, self.seen_articles_file
        )
        self.enable_notifications = _get(
            obj, "enable_notifications", bool, self.enable_notifications
        )

    def save(self) -> None:
        """Write the settings to ``config_file``, creating its directory."""
        _write_json(
            self.config_file,
            {
                "refresh_rate": _nanoseconds(self.refresh_rate),
                "feeds_file": self.feeds_file,
                "color_theme": self.color_theme,
                "seen_articles_file": self.seen_articles_file,
                "enable_notifications": self.enable_notifications,
            },
        )


@dataclass
class FeedConfig:
    """The list of configured feeds."""

    feeds: list[FeedInfo] = field(default_factory=list)

    def save(self, filename: str | Path) -> None:
        """Write the feed list to ``filename``, creating its directory."""
        _write_json(
            filename,
            {"feeds": [{"name": feed.name, "url": feed.url} for feed in self.feeds]},
        )


@dataclass
class SeenArticles:
    """Article links that have already been seen."""

    articles: dict[str, bool] = field(default_factory=dict)

    def save(self, filename: str | Path) -> None:
        """Write the seen links to ``filename``, creating its directory."""
        _write_json(filename, {"articles": self.articles}, sort_keys=True)


def default_config() -> Config:
    """Settings used when no configuration file exists."""
    config_dir = Path.home() / ".config" / "rsss"
    return Config(
        refresh_rate=timedelta(minutes=5),
        feeds_file=str(config_dir / "feeds.json"),
        color_theme="default",
        seen_articles_file=str(config_dir / "seen.json"),
        enable_notifications=True,
        config_file=str(config_dir / "config.json"),
    )


def load() -> Config:
    """Load the settings file over the defaults; missing file means defaults."""
    config = default_config()
    try:
        data = _read_json(config.config_file)
    except FileNotFoundError:
        return config
    config._update(data)
    return config


def _feed_info(entry: Any) -> FeedInfo:
    obj = _decode_object(entry, "feed")
    return FeedInfo(name=_get(obj, "name", str, ""), url=_get(obj, "url", str, ""))


def load_feeds(filename: str | Path) -> FeedConfig:
    """Load the feed list; a missing file is replaced by the default feeds."""
    try:
        data = _read_json(filename)
    except FileNotFoundError:
        feeds = FeedConfig([FeedInfo(name=name, url=url) for name, url in _DEFAULT_FEEDS])
        with suppress(OSError):
            feeds.save(filename)
        return feeds

    entries = _decode_object(data, "feed configuration").get("feeds")
    if entries is None:
        return FeedConfig()
    if not isinstance(entries, list):
        raise ValueError(f"cannot decode {type(entries).__name__} into field 'feeds'")
    return FeedConfig([_feed_info(entry) for entry in entries])


def load_seen_articles(filename: str | Path) -> SeenArticles:
    """Load the seen-article links; a missing file means none were seen."""
    try:
        data = _read_json(filename)
    except FileNotFoundError:
        return SeenArticles()

    articles = _decode_object(data, "seen articles").get("articles")
    if articles is None:
        return SeenArticles()
    if not isinstance(articles, dict):
        raise ValueError(
            f"cannot decode {type(articles).__name__} into field 'articles'"
        )
    return SeenArticles(
        {link: _get(articles, link, bool, False) for link in articles}
    )