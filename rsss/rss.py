"""Fetching and parsing RSS 2.0 feeds."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable

import requests


class FeedError(Exception):
    """Raised when a feed cannot be fetched or parsed."""


@dataclass
class FeedInfo:
    """A configured feed: a display name and the feed's URL."""

    name: str
    url: str


@dataclass
class Item:
    """One ``<item>`` of an RSS channel, with its fields as raw text."""

    title: str = ""
    link: str = ""
    description: str = ""
    pub_date: str = ""


@dataclass
class Channel:
    """The ``<channel>`` element of an RSS document."""

    title: str = ""
    link: str = ""
    description: str = ""
    items: list[Item] = field(default_factory=list)


@dataclass
class Feed:
    """A parsed RSS document."""

    channel: Channel = field(default_factory=Channel)


@dataclass
class Article:
    """An item taken from a feed, with its publication date parsed."""

    title: str
    link: str
    description: str
    pub_date: datetime
    feed_name: str


_ITEM_FIELDS = {
    "title": "title",
    "link": "link",
    "description": "description",
    "pubDate": "pub_date",
}
_CHANNEL_FIELDS = {"title": "title", "link": "link", "description": "description"}


def _local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _direct_text(element: ET.Element) -> str:
    """Character data that sits directly inside the element, not in children."""
    return (element.text or "") + "".join(child.tail or "" for child in element)


def _parse_item(element: ET.Element) -> Item:
    values = {
        attr: _direct_text(child)
        for child in element
        if (attr := _ITEM_FIELDS.get(_local_name(child.tag)))
    }
    return Item(**values)


def _merge_channel(channel: Channel, element: ET.Element) -> None:
    for child in element:
        name = _local_name(child.tag)
        if name == "item":
            channel.items.append(_parse_item(child))
        elif name in _CHANNEL_FIELDS:
            setattr(channel, _CHANNEL_FIELDS[name], _direct_text(child))


def parse_feed(data: bytes | str) -> Feed:
    """Parse an RSS document; raise FeedError if it is not one."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise FeedError(f"failed to parse RSS: {exc}") from exc

    root_name = _local_name(root.tag)
    if root_name != "rss":
        raise FeedError(
            f"failed to parse RSS: expected element type <rss> but have <{root_name}>"
        )

    channel = Channel()
    for child in root:
        if _local_name(child.tag) == "channel":
            _merge_channel(channel, child)
    return Feed(channel=channel)


_MONTHS = {
    name: number
    for number, name in enumerate(
        ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
         "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
        start=1,
    )
}

_RFC1123 = re.compile(
    r"(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun), (?P<day>\d{1,2}) "
    r"(?P<month>Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec) (?P<year>\d{4}) "
    r"(?P<hour>\d{1,2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:[.,](?P<fraction>\d+))? "
    r"(?P<zone>[+-]\d{4}|[A-Z]{3,5})"
)

_ISO8601 = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.(?P<fraction>\d+))?"
    r"(?P<zone>Z|[+-]\d{2}:\d{2})"
)


def _microseconds(fraction: str | None) -> int:
    if not fraction:
        return 0
    return int(fraction[:6].ljust(6, "0"))


def _offset_zone(sign: str, hours: str, minutes: str) -> timezone:
    hour_value, minute_value = int(hours), int(minutes)
    if hour_value > 23 or minute_value > 59:
        raise ValueError("time zone offset out of range")
    offset = timedelta(hours=hour_value, minutes=minute_value)
    return timezone(-offset if sign == "-" else offset)


def _parse_rfc1123(text: str) -> datetime:
    match = _RFC1123.fullmatch(text)
    if match is None:
        raise ValueError("not an RFC 1123 date")
    zone = match["zone"]
    if zone[0] in "+-":
        tzinfo = _offset_zone(zone[0], zone[1:3], zone[3:5])
    else:
        # A named zone carries no offset of its own; treat it as UTC.
        tzinfo = timezone.utc
    return datetime(
        int(match["year"]),
        _MONTHS[match["month"]],
        int(match["day"]),
        int(match["hour"]),
        int(match["minute"]),
        int(match["second"]),
        _microseconds(match["fraction"]),
        tzinfo=tzinfo,
    )


def _parse_iso8601(text: str) -> datetime:
    match = _ISO8601.fullmatch(text)
    if match is None:
        raise ValueError("not an ISO 8601 date")
    zone = match["zone"]
    if zone == "Z":
        tzinfo = timezone.utc
    else:
        tzinfo = _offset_zone(zone[0], zone[1:3], zone[4:6])
    return datetime(
        int(match["year"]),
        int(match["month"]),
        int(match["day"]),
        int(match["hour"]),
        int(match["minute"]),
        int(match["second"]),
        _microseconds(match["fraction"]),
        tzinfo=tzinfo,
    )


def parse_time(pub_date: str) -> datetime:
    """Parse a feed date in one of the common formats, or return the current time."""
    for parser in (_parse_rfc1123, _parse_iso8601):
        try:
            return parser(pub_date)
        except ValueError:
            continue
    return datetime.now().astimezone()


class Client:
    """Fetches feeds over HTTP with a fixed timeout."""

    def __init__(self, timeout: float | timedelta) -> None:
        if isinstance(timeout, timedelta):
            timeout = timeout.total_seconds()
        self.timeout = float(timeout)
        self._session = requests.Session()

    def fetch_feed(self, url: str) -> Feed:
        """Download and parse the feed at ``url``."""
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FeedError(f"failed to fetch RSS feed: {exc}") from exc

        with response:
            if response.status_code != 200:
                raise FeedError(f"HTTP error: {response.status_code}")
            try:
                body = response.content
            except requests.RequestException as exc:
                raise FeedError(f"failed to read response body: {exc}") from exc

        return parse_feed(body)

    def fetch_multiple_feeds(self, feeds: Iterable[FeedInfo]) -> list[Article]:
        """Fetch every feed and return all their articles, newest first.

        Feeds that fail are skipped; FeedError is raised only when nothing
        was fetched and at least one feed failed.
        """
        articles: list[Article] = []
        errors: list[str] = []

        for info in feeds:
            try:
                feed = self.fetch_feed(info.url)
            except FeedError as exc:
                errors.append(f"Failed to fetch {info.name}: {exc}")
                continue
            articles.extend(
                Article(
                    title=item.title,
                    link=item.link,
                    description=item.description,
                    pub_date=parse_time(item.pub_date),
                    feed_name=info.name,
                )
                for item in feed.channel.items
            )

        articles.sort(key=lambda article: article.pub_date, reverse=True)

        if not articles and errors:
            raise FeedError(f"failed to fetch any feeds: [{' '.join(errors)}]")
        return articles