"""Drawing the interface model as text for the terminal."""

from __future__ import annotations

from datetime import timedelta
from typing import Callable

from .model import AppState, Model, wrap_text

_FEED_HELP = "Use ↑/↓ to navigate, Enter to read, 'r' to refresh, Esc to menu"
_FALLBACK_WIDTH = 80

_LINE_BREAKS = ("<br>", "<br/>", "<br />", "<p>", "</p>")
_ENTITIES = (
    ("&#8217;", "'"),
    ("&#8220;", '"'),
    ("&#8221;", '"'),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#160;", " "),
    ("&nbsp;", " "),
)

_NANOSECOND = 1
_MICROSECOND = 1000 * _NANOSECOND
_MILLISECOND = 1000 * _MICROSECOND
_SECOND = 1000 * _MILLISECOND
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE


def _with_fraction(value: int, unit: int) -> str:
    whole, part = divmod(value, unit)
    if part == 0:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{str(part).zfill(digits).rstrip('0')}"


def _format_duration(duration: timedelta) -> str:
    """Write a duration the way the settings screen shows it, e.g. ``5m0s``."""
    nanoseconds = (duration // timedelta(microseconds=1)) * 1000
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    nanoseconds = abs(nanoseconds)

    if nanoseconds < _MICROSECOND:
        return f"{sign}{nanoseconds}ns"
    if nanoseconds < _MILLISECOND:
        return f"{sign}{_with_fraction(nanoseconds, _MICROSECOND)}µs"
    if nanoseconds < _SECOND:
        return f"{sign}{_with_fraction(nanoseconds, _MILLISECOND)}ms"

    hours, rest = divmod(nanoseconds, _HOUR)
    minutes, rest = divmod(rest, _MINUTE)
    text = ""
    if hours:
        text += f"{hours}h"
    if hours or minutes:
        text += f"{minutes}m"
    text += f"{_with_fraction(rest, _SECOND)}s"
    return sign + text


def clean_description(text: str) -> str:
    """Strip HTML tags and common entities and drop blank lines."""
    content = text
    for tag in _LINE_BREAKS:
        content = content.replace(tag, "\n")

    while "<" in content and ">" in content:
        start = content.index("<")
        end = content.find(">", start)
        if end == -1:
            break
        content = content[:start] + content[end + 1:]

    for entity, char in _ENTITIES:
        content = content.replace(entity, char)

    lines = (line.strip() for line in content.strip().split("\n"))
    return "\n\n".join(line for line in lines if line)


def _terminal_width(model: Model) -> int:
    return model.width or _FALLBACK_WIDTH


def _view_menu(model: Model) -> str:
    styles = model.styles
    parts = [styles.header.render("📡 RSS Reader"), "\n\n"]
    entries = ("📰 See Feeds", "⚙️ Manage Feeds", "🎨 Configure")
    for position, entry in enumerate(entries):
        style = styles.selected if position == model.menu_selected else styles.normal
        parts += [style.render(f"  {entry}"), "\n"]
    parts += ["\n", styles.normal.render("Use ↑/↓ to navigate, Enter to select, q to quit")]
    return styles.menu.render("".join(parts))


def _view_feed(model: Model) -> str:
    styles = model.styles
    header = f"📰 Latest Articles | Updated: {model.last_refresh.strftime('%H:%M:%S')}"
    if model.err is not None:
        header += f" | Error: {model.err}"
    parts = [styles.title.render(header), "\n"]

    notice = None
    if model.loading:
        notice = styles.normal.render("Loading feeds...")
    elif not model.feeds.feeds:
        notice = styles.error.render(
            "No feeds configured! Go to 'Manage Feeds' to add RSS feeds first."
        )
    elif not model.articles:
        notice = styles.normal.render("No articles found. Press 'r' to refresh.")
    if notice is not None:
        parts += [notice, "\n", styles.normal.render(_FEED_HELP)]
        return "".join(parts)

    terminal_width = _terminal_width(model)
    start = model.viewport_top
    end = min(len(model.articles), start + model.max_visible_articles())
    feed_name_width = min(15, max(8, terminal_width // 6))

    for index, article in enumerate(model.articles[start:end], start=start):
        style = styles.selected if index == model.selected else styles.normal
        feed_name = article.feed_name
        if len(feed_name) > feed_name_width:
            feed_name = feed_name[: feed_name_width - 3] + "..."
        prefix = f"{article.pub_date.strftime('%H:%M')} {feed_name:<{feed_name_width}} "

        title_max_width = max(20, terminal_width - len(prefix) - 2)
        title = article.title
        if len(title) > title_max_width:
            title = title[: title_max_width - 3] + "..."
        parts += [style.render(prefix + title), "\n"]

    parts.append(styles.normal.render(_FEED_HELP))
    return "".join(parts)


def _feed_list(model: Model) -> list[str]:
    parts = []
    for position, feed in enumerate(model.feeds.feeds):
        style = model.styles.selected if position == model.selected else model.styles.normal
        parts += [style.render(f"{position + 1}. {feed.name} ({feed.url})"), "\n"]
    return parts


def _view_manage_feeds(model: Model) -> str:
    styles = model.styles
    parts = [styles.title.render("⚙️ Manage Feeds"), "\n\n"]
    if not model.feeds.feeds:
        parts.append(styles.normal.render("No feeds configured."))
    else:
        parts += [styles.accent.render("Current Feeds:"), "\n"]
        parts += _feed_list(model)
    parts += [
        "\n",
        styles.normal.render(
            "Use ↑/↓ to navigate, Enter/d to delete selected, 'a' to add, Esc to menu"
        ),
    ]
    return "".join(parts)


def _view_configure(model: Model) -> str:
    styles = model.styles
    config = model.config
    notifications = "enabled" if config.enable_notifications else "disabled"
    settings = (
        f"  Refresh Rate: {_format_duration(config.refresh_rate)}",
        f"  Color Theme: {config.color_theme}",
        f"  Notifications: {notifications}",
    )
    parts = [
        styles.title.render("🎨 Configuration"),
        "\n\n",
        styles.accent.render("Settings:"),
        "\n",
    ]
    for position, setting in enumerate(settings):
        style = styles.selected if position == model.selected else styles.normal
        parts += [style.render(setting), "\n"]
    parts += [
        styles.normal.render(f"  Feeds File: {config.feeds_file}"),
        "\n\n",
        styles.normal.render("Use ↑/↓ to navigate, Enter/Space to change, Esc to menu"),
    ]
    return "".join(parts)


def _view_add_feed(model: Model) -> str:
    styles = model.styles
    return "".join(
        [
            styles.title.render("➕ Add Feed"),
            "\n\n",
            styles.normal.render("Enter feed name|URL (or just URL):"),
            "\n",
            styles.selected.render(model.input + "█"),
            "\n\n",
            styles.normal.render("Examples:"),
            "\n",
            styles.normal.render("  BBC News|https://feeds.bbci.co.uk/news/rss.xml"),
            "\n",
            styles.normal.render("  https://feeds.bbci.co.uk/news/rss.xml"),
            "\n\n",
            styles.normal.render("Press Enter to save, Esc to cancel"),
        ]
    )


def _view_remove_feed(model: Model) -> str:
    styles = model.styles
    parts = [styles.title.render("🗑️ Remove Feed"), "\n\n"]
    if not model.feeds.feeds:
        parts.append(styles.normal.render("No feeds to remove."))
    else:
        parts += [styles.normal.render("Select feed to remove:"), "\n\n"]
        parts += _feed_list(model)
    parts += [
        "\n",
        styles.normal.render("Use ↑/↓ to select, Enter to remove, Esc to cancel"),
    ]
    return "".join(parts)


def _view_article(model: Model) -> str:
    styles = model.styles
    article = model.selected_article()
    if article is None:
        return "".join(
            [
                styles.error.render("No article selected"),
                "\n\n",
                styles.normal.render("Press Esc to return to feed list"),
            ]
        )

    terminal_width = _terminal_width(model)
    title = article.title
    if len(title) > terminal_width - 4:
        title = wrap_text(title, terminal_width - 4)
    parts = [styles.title.render("📖 " + title), "\n\n"]

    time_str = article.pub_date.strftime("%H:%M on %Y-%m-%d")
    if terminal_width < 60:
        parts += [
            styles.accent.render(f"🕒 {time_str}"),
            "\n",
            styles.accent.render(f"📰 {article.feed_name}"),
        ]
    else:
        parts.append(styles.accent.render(f"🕒 {time_str} | 📰 {article.feed_name}"))
    parts.append("\n")

    url = article.link
    if len(url) > terminal_width - 4:
        url = url[: max(terminal_width - 7, 0)] + "..."
    parts += [styles.normal.render(f"🔗 {url}"), "\n\n"]

    if article.description:
        content = clean_description(article.description)
        parts.append(styles.normal.render(wrap_text(content, terminal_width - 4)))
    else:
        parts.append(styles.normal.render("No content available for this article."))

    parts += [
        "\n\n",
        styles.normal.render("Press 'o' to open in browser, Esc to return to feed list"),
    ]
    return "".join(parts)


def _add_notification(model: Model, content: str) -> str:
    styles = model.styles
    return "".join(
        [
            styles.success.render(f"  {model.notification_msg}  "),
            "\n",
            styles.normal.render("Press Space/Enter/n to dismiss"),
            "\n\n",
            content,
        ]
    )


_VIEWS: dict[AppState, Callable[[Model], str]] = {
    AppState.MENU: _view_menu,
    AppState.FEED_VIEW: _view_feed,
    AppState.ARTICLE_VIEW: _view_article,
    AppState.MANAGE_FEEDS: _view_manage_feeds,
    AppState.CONFIGURE: _view_configure,
    AppState.ADD_FEED: _view_add_feed,
    AppState.REMOVE_FEED: _view_remove_feed,
}


def render(model: Model) -> str:
    """Draw the screen for the model's current state."""
    view = _VIEWS.get(model.state)
    content = view(model) if view is not None else "Unknown state"
    if model.show_notification:
        content = _add_notification(model, content)
    return content