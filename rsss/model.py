"""The interface model: application state and how messages change it."""

from __future__ import annotations

from contextlib import suppress
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional

from .commands import Cmd, batch, fetch_all_feeds_cmd, open_url_cmd, quit_cmd, tick_cmd
from .config import Config, FeedConfig, SeenArticles, load_seen_articles
from .messages import FetchMsg, KeyMsg, OpenURLMsg, SaveMsg, TickMsg, WindowSizeMsg
from .rss import Article, Client, FeedInfo
from .styles import new_styles

_THEME_ORDER = ("default", "dark", "ocean")
_REFRESH_CYCLE = {
    timedelta(minutes=1): timedelta(minutes=5),
    timedelta(minutes=5): timedelta(minutes=15),
}
_DISMISS_KEYS = frozenset({"space", "enter", "n"})
_MENU_ENTRIES = 3
_CONFIG_ENTRIES = 3


class AppState(Enum):
    """The screen the interface is showing."""

    MENU = 0
    FEED_VIEW = 1
    ARTICLE_VIEW = 2
    MANAGE_FEEDS = 3
    CONFIGURE = 4
    ADD_FEED = 5
    REMOVE_FEED = 6


def wrap_text(text: str, width: int) -> str:
    """Wrap ``text`` on word boundaries into lines of at most ``width`` characters."""
    if len(text) <= width:
        return text
    words = text.split()
    if not words:
        return text

    lines: list[str] = []
    current = ""
    for word in words:
        if current and len(current) + 1 + len(word) > width:
            lines.append(current)
            current = ""
        current = f"{current} {word}" if current else word
    if current:
        lines.append(current)
    return "\n".join(lines)


def _load_seen(filename: str) -> dict[str, bool]:
    try:
        return load_seen_articles(filename).articles
    except (OSError, ValueError):
        return {}


class Model:
    """Everything the interface shows, and the rules for changing it."""

    def __init__(self, cfg: Config, feeds: FeedConfig, rss_client: Client) -> None:
        self.state = AppState.MENU
        self.menu_selected = 0
        self.selected = 0
        self.feeds = feeds
        self.articles: list[Article] = []
        self.config = cfg
        self.styles = new_styles(cfg.color_theme)
        self.loading = True
        self.err: Optional[Exception] = None
        self.input = ""
        self.last_refresh = datetime.now()
        self.rss_client = rss_client
        self.width = 0
        self.height = 0
        self.viewport_top = 0

        self.seen_articles: dict[str, bool] = _load_seen(cfg.seen_articles_file)
        self.new_article_count = 0
        self.show_notification = False
        self.notification_msg = ""

    # Commands and messages

    def init(self) -> Optional[Cmd]:
        """The commands to run when the program starts."""
        fetch = fetch_all_feeds_cmd(self.rss_client, self.feeds) if self.feeds.feeds else None
        return batch(fetch, tick_cmd(self.config.refresh_rate))

    def update(self, msg: object) -> Optional[Cmd]:
        """Apply ``msg`` to the model and return the next command, if any."""
        if isinstance(msg, WindowSizeMsg):
            self.width = msg.width
            self.height = msg.height
        elif isinstance(msg, KeyMsg):
            return self._handle_key(msg)
        elif isinstance(msg, FetchMsg):
            self.loading = False
            if msg.err is None and msg.articles:
                self.check_for_new_articles(msg.articles)
            self.articles = list(msg.articles)
            self.err = msg.err
            self.last_refresh = datetime.now()
            self.selected = 0
            self.viewport_top = 0
        elif isinstance(msg, TickMsg):
            if datetime.now() - self.last_refresh >= self.config.refresh_rate:
                return self._fetch()
            return tick_cmd(self.config.refresh_rate)
        elif isinstance(msg, SaveMsg):
            self.err = None if msg.success else msg.err
        elif isinstance(msg, OpenURLMsg):
            self.state = AppState.FEED_VIEW
            self.err = msg.err
        return None

    def selected_article(self) -> Optional[Article]:
        """The article under the cursor, or None."""
        if 0 <= self.selected < len(self.articles):
            return self.articles[self.selected]
        return None

    def max_visible_articles(self) -> int:
        """How many article lines fit on the screen."""
        height = self.height or 24
        content_height = height - 3
        return max(1, content_height - 1)

    # Notifications

    def check_for_new_articles(self, articles: list[Article]) -> None:
        """Mark articles as seen and raise a notification for new ones."""
        if not self.seen_articles:
            for article in articles:
                self.seen_articles[article.link] = True
            self._save_seen_articles()
            return

        new_count = 0
        for article in articles:
            if not self.seen_articles.get(article.link, False):
                new_count += 1
                self.seen_articles[article.link] = True

        if new_count == 0:
            return
        if self.config.enable_notifications:
            self.new_article_count = new_count
            self.show_notification = True
            if new_count == 1:
                self.notification_msg = "🔔 1 new article available!"
            else:
                self.notification_msg = f"🔔 {new_count} new articles available!"
        self._save_seen_articles()

    def dismiss_notification(self) -> None:
        """Clear the current notification."""
        self.show_notification = False
        self.notification_msg = ""
        self.new_article_count = 0

    def _save_seen_articles(self) -> None:
        with suppress(OSError):
            SeenArticles(self.seen_articles).save(self.config.seen_articles_file)

    # Key handling

    def _fetch(self) -> Cmd:
        return fetch_all_feeds_cmd(self.rss_client, self.feeds)

    def _handle_key(self, msg: KeyMsg) -> Optional[Cmd]:
        key = msg.key
        if self.show_notification and key in _DISMISS_KEYS:
            self.dismiss_notification()
            return None

        handlers: dict[AppState, Callable[[str], Optional[Cmd]]] = {
            AppState.MENU: self._update_menu,
            AppState.FEED_VIEW: self._update_feed_view,
            AppState.ARTICLE_VIEW: self._update_article_view,
            AppState.MANAGE_FEEDS: self._update_manage_feeds,
            AppState.CONFIGURE: self._update_configure,
            AppState.ADD_FEED: self._update_add_feed,
            AppState.REMOVE_FEED: self._update_remove_feed,
        }
        return handlers[self.state](key)

    def _update_menu(self, key: str) -> Optional[Cmd]:
        if key in ("ctrl+c", "q"):
            return quit_cmd
        if key in ("up", "k"):
            if self.menu_selected > 0:
                self.menu_selected -= 1
        elif key in ("down", "j"):
            if self.menu_selected < _MENU_ENTRIES - 1:
                self.menu_selected += 1
        elif key == "enter":
            targets = (AppState.FEED_VIEW, AppState.MANAGE_FEEDS, AppState.CONFIGURE)
            if 0 <= self.menu_selected < len(targets):
                self.state = targets[self.menu_selected]
                self.selected = 0
        return None

    def _update_feed_view(self, key: str) -> Optional[Cmd]:
        if key in ("ctrl+c", "q", "esc"):
            self.state = AppState.MENU
        elif key in ("up", "k"):
            if self.selected > 0:
                self.selected -= 1
                if self.selected < self.viewport_top:
                    self.viewport_top = self.selected
        elif key in ("down", "j"):
            if self.selected < len(self.articles) - 1:
                self.selected += 1
                visible = self.max_visible_articles()
                if self.selected >= self.viewport_top + visible:
                    self.viewport_top = self.selected - visible + 1
        elif key == "enter":
            if self.selected_article() is not None:
                self.state = AppState.ARTICLE_VIEW
        elif key == "r":
            self.loading = True
            return self._fetch()
        return None

    def _update_article_view(self, key: str) -> Optional[Cmd]:
        if key in ("ctrl+c", "q", "esc"):
            self.state = AppState.FEED_VIEW
        elif key == "o":
            article = self.selected_article()
            if article is not None:
                return open_url_cmd(article.link)
        return None

    def _update_manage_feeds(self, key: str) -> Optional[Cmd]:
        feeds = self.feeds.feeds
        if key in ("ctrl+c", "q", "esc"):
            self.state = AppState.MENU
        elif key in ("up", "k"):
            if self.selected > 0:
                self.selected -= 1
        elif key in ("down", "j"):
            if self.selected < len(feeds) - 1:
                self.selected += 1
        elif key == "a":
            self.state = AppState.ADD_FEED
            self.input = ""
        elif key == "d":
            if feeds:
                self.state = AppState.REMOVE_FEED
                self.selected = 0
        elif key == "enter":
            if feeds and self.selected < len(feeds):
                self.state = AppState.REMOVE_FEED
        return None

    def _update_configure(self, key: str) -> Optional[Cmd]:
        if key in ("ctrl+c", "q", "esc"):
            self.state = AppState.MENU
        elif key in ("up", "k"):
            if self.selected > 0:
                self.selected -= 1
        elif key in ("down", "j"):
            if self.selected < _CONFIG_ENTRIES - 1:
                self.selected += 1
        elif key in ("enter", "space"):
            if self.selected == 0:
                self.config.refresh_rate = _REFRESH_CYCLE.get(
                    self.config.refresh_rate, timedelta(minutes=1)
                )
            elif self.selected == 1:
                theme = self.config.color_theme
                if theme in _THEME_ORDER:
                    position = _THEME_ORDER.index(theme)
                    self.config.color_theme = _THEME_ORDER[(position + 1) % len(_THEME_ORDER)]
                self.styles = new_styles(self.config.color_theme)
            elif self.selected == 2:
                self.config.enable_notifications = not self.config.enable_notifications
            else:
                return None
            with suppress(OSError):
                self.config.save()
        return None

    def _save_feeds(self) -> None:
        try:
            self.feeds.save(self.config.feeds_file)
        except OSError as exc:
            self.err = exc

    def _update_add_feed(self, key: str) -> Optional[Cmd]:
        if key in ("ctrl+c", "esc"):
            self.state = AppState.MANAGE_FEEDS
        elif key == "enter":
            if self.input:
                name, sep, rest = self.input.partition("|")
                name = name.strip()
                url = rest.strip() if sep else name
                self.feeds.feeds.append(FeedInfo(name=name, url=url))
                self._save_feeds()
                self.state = AppState.MANAGE_FEEDS
                return self._fetch()
        elif key == "backspace":
            self.input = self.input[:-1]
        else:
            self.input += key
        return None

    def _clamp_feed_selection(self) -> None:
        count = len(self.feeds.feeds)
        if count == 0:
            self.selected = 0
        elif self.selected >= count:
            self.selected = count - 1

    def _update_remove_feed(self, key: str) -> Optional[Cmd]:
        feeds = self.feeds.feeds
        if key in ("ctrl+c", "esc"):
            self.state = AppState.MANAGE_FEEDS
            self._clamp_feed_selection()
        elif key in ("up", "k"):
            if self.selected > 0:
                self.selected -= 1
        elif key in ("down", "j"):
            if self.selected < len(feeds) - 1:
                self.selected += 1
        elif key == "enter":
            if 0 <= self.selected < len(feeds):
                del feeds[self.selected]
                self._save_feeds()
                self.state = AppState.MANAGE_FEEDS
                self._clamp_feed_selection()
                return self._fetch()
        return None