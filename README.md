# rsss

rsss is a small RSS reader for the terminal. It works in two modes:

- **Print mode** fetches one feed and prints its first ten items.
- **Interactive mode** is a full-screen reader for all of your saved feeds. Articles from every feed are merged and sorted newest first. The feeds refresh on a timer, and a banner appears when new articles arrive.

## Installation

```
pip install .
```

This installs the `rsss` command.

## Usage

To print a single feed:

```
rsss https://feeds.bbci.co.uk/news/rss.xml
```

This prints the channel's title, description and link. Then, for up to ten items, it prints each item's title, link, date (as given in the feed) and description. If the fetch or the parse fails, rsss prints `Error: ...` and exits with status 1.

To open the interactive reader on your saved feeds:

```
rsss --menu
```

`rsss --tui` does the same thing. To open the reader on one feed only, give the feed's URL. This does not change your saved list:

```
rsss --tui https://feeds.bbci.co.uk/news/rss.xml
```

If you run `rsss` with no arguments, it prints a usage summary and exits with status 1.

### Keys

| Screen | Keys |
| --- | --- |
| Menu | `↑`/`↓` or `k`/`j` to move, `Enter` to select, `q` or `Ctrl+C` to quit |
| Feed list | `↑`/`↓` or `k`/`j` to move, `Enter` to read, `r` to refresh, `Esc`/`q` back to the menu |
| Article | `o` to open the link in your browser, `Esc`/`q` back to the list |
| Manage feeds | `a` to add a feed, `d` or `Enter` to open the remove screen, `Esc`/`q` back to the menu |
| Remove feed | `↑`/`↓` to choose, `Enter` to remove, `Esc` to cancel |
| Add feed | type `Name\|URL` or just a URL, `Backspace` to delete, `Enter` to save, `Esc` to cancel |
| Configure | `↑`/`↓` to choose, `Enter` to change the selected setting, `Esc`/`q` back to the menu |

To dismiss a new-article banner, press `Enter` or `n`.

On the Add feed screen, if you type only a URL, the URL is also used as the feed's name. Adding or removing a feed saves the list and refetches all feeds.

To open a link, rsss starts `xdg-open` on Linux, `open` on macOS and `cmd /c start` on Windows. On any other platform it reports an error.

## Configuration

Settings are kept in `~/.config/rsss/`:

- `config.json` holds these settings:
  - `refresh_rate`, stored in nanoseconds. The default is 5 minutes, and the Configure screen cycles it through 1, 5 and 15 minutes.
  - `color_theme`: `default`, `dark` or `ocean`.
  - `enable_notifications`.
  - `feeds_file` and `seen_articles_file`, the paths of the two files below.

  If `config.json` does not exist, the defaults are used. Changes made on the Configure screen are saved straight away.
- `feeds.json` holds the list of feeds. If it does not exist, it is created with two starter feeds.
- `seen.json` holds the links of articles already seen. On the first fetch, when no links have been seen yet, every article is marked as seen and no banner is shown.

## Library use

```python
from rsss.rss import Client, FeedInfo, parse_feed, parse_time

client = Client(timeout=10)
feed = client.fetch_feed("https://feeds.bbci.co.uk/news/rss.xml")
print(feed.channel.title)

articles = client.fetch_multiple_feeds([
    FeedInfo(name="BBC News", url="https://feeds.bbci.co.uk/news/rss.xml"),
])
```

A failed fetch, a non-200 response or a document that is not RSS raises `rsss.rss.FeedError`. `fetch_multiple_feeds` skips feeds that fail. It raises only when no articles were fetched and at least one feed failed.

`parse_time` reads dates in RFC 1123 form (`Mon, 01 Jan 2024 12:00:00 GMT` or with a numeric offset) and in ISO 8601 form (`2024-01-01T12:00:00Z`). A named time zone is treated as UTC. If a date cannot be read, `parse_time` returns the current time.

## Limitations

- Only RSS 2.0 documents, with an `<rss>` root element, are read. Atom feeds are rejected.
- The Configure screen cannot change file paths. To move them, edit `config.json`.
- The location of `config.json` itself is fixed at `~/.config/rsss/config.json`.

## Running the tests

```
pip install ".[test]"
pytest
```