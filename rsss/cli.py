"""Command-line entry point: print a feed, or start the interactive reader."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from .app import Program
from .config import load, load_feeds
from .model import Model
from .rss import Client, Feed, FeedError, FeedInfo

_TIMEOUT_SECONDS = 10
_CLI_ARTICLE_LIMIT = 10

_USAGE = """\
Usage: rsss <RSS_URL>
       rsss --tui [RSS_URL]
       rsss --menu
Example: rsss https://feeds.feedburner.com/oreilly/radar
         rsss --tui https://feeds.bbci.co.uk/news/rss.xml
         rsss --menu"""


def display_feed(feed: Feed) -> None:
    """Print the channel and its first ten items."""
    channel = feed.channel
    print(f"Feed: {channel.title}")
    print(f"Description: {channel.description}")
    print(f"Link: {channel.link}\n")
    for item in channel.items[:_CLI_ARTICLE_LIMIT]:
        print(f"Title: {item.title}")
        print(f"Link: {item.link}")
        print(f"Date: {item.pub_date}")
        print(f"Description: {item.description}\n")


def run_cli(url: str) -> None:
    """Fetch the feed at ``url`` and print it."""
    print(f"Fetching RSS feed from: {url}\n")
    feed = Client(_TIMEOUT_SECONDS).fetch_feed(url)
    display_feed(feed)


def run_tui(url: str) -> None:
    """Start the interactive reader, showing only ``url`` if one is given."""
    cfg = load()
    feeds = load_feeds(cfg.feeds_file)
    if url:
        feeds.feeds = [FeedInfo(name="Command Line Feed", url=url)]
    model = Model(cfg, feeds, Client(_TIMEOUT_SECONDS))
    Program(model).run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command and return its exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(_USAGE)
        return 1

    if args[0] in ("--tui", "--menu"):
        url = args[1] if len(args) >= 2 else ""
        try:
            run_tui(url)
        except (FeedError, OSError, ValueError) as exc:
            print(f"Error running TUI: {exc}")
            return 1
        return 0

    try:
        run_cli(args[0])
    except (FeedError, OSError, ValueError) as exc:
        print(f"Error: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())