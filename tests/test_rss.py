from datetime import datetime, timedelta, timezone

import pytest
import requests
import responses

from rsss.rss import (
    Article,
    Client,
    Feed,
    FeedError,
    FeedInfo,
    parse_feed,
    parse_time,
)

TEST_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
	<channel>
		<title>Test Feed</title>
		<link>https://example.com</link>
		<description>A test RSS feed</description>
		<item>
			<title>Test Article</title>
			<link>https://example.com/article1</link>
			<description>This is a test article</description>
			<pubDate>Mon, 01 Jan 2024 12:00:00 GMT</pubDate>
		</item>
	</channel>
</rss>"""

TEST_RSS_1 = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
	<channel>
		<title>Feed 1</title>
		<link>https://example1.com</link>
		<description>First test feed</description>
		<item>
			<title>Article 1</title>
			<link>https://example1.com/article1</link>
			<description>First article</description>
			<pubDate>Mon, 01 Jan 2024 12:00:00 GMT</pubDate>
		</item>
	</channel>
</rss>"""

TEST_RSS_2 = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
	<channel>
		<title>Feed 2</title>
		<link>https://example2.com</link>
		<description>Second test feed</description>
		<item>
			<title>Article 2</title>
			<link>https://example2.com/article1</link>
			<description>Second article</description>
			<pubDate>Tue, 02 Jan 2024 12:00:00 GMT</pubDate>
		</item>
	</channel>
</rss>"""

FEED_URL = "https://example.com/feed.xml"
FEED_URL_1 = "https://example.com/feed1.xml"
FEED_URL_2 = "https://example.com/feed2.xml"


def test_new_client_keeps_timeout():
    assert Client(5).timeout == 5


def test_new_client_accepts_timedelta():
    assert Client(timedelta(seconds=5)).timeout == 5


def test_fetch_feed():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET, FEED_URL, body=TEST_RSS, status=200,
            content_type="application/xml",
        )
        feed = Client(5).fetch_feed(FEED_URL)

    assert feed.channel.title == "Test Feed"
    assert feed.channel.link == "https://example.com"
    assert feed.channel.description == "A test RSS feed"
    assert len(feed.channel.items) == 1
    item = feed.channel.items[0]
    assert item.title == "Test Article"
    assert item.link == "https://example.com/article1"
    assert item.description == "This is a test article"
    assert item.pub_date == "Mon, 01 Jan 2024 12:00:00 GMT"


def test_fetch_feed_http_error():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, FEED_URL, status=404)
        with pytest.raises(FeedError, match="HTTP error: 404"):
            Client(5).fetch_feed(FEED_URL)


def test_fetch_feed_connection_error():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, FEED_URL, body=requests.ConnectionError("refused"))
        with pytest.raises(FeedError, match="failed to fetch RSS feed"):
            Client(5).fetch_feed(FEED_URL)


def test_fetch_feed_unparseable_body():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, FEED_URL, body="this is not xml", status=200)
        with pytest.raises(FeedError, match="failed to parse RSS"):
            Client(5).fetch_feed(FEED_URL)


def test_fetch_multiple_feeds_sorted_newest_first():
    feeds = [
        FeedInfo(name="Test Feed 1", url=FEED_URL_1),
        FeedInfo(name="Test Feed 2", url=FEED_URL_2),
    ]
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, FEED_URL_1, body=TEST_RSS_1, status=200)
        rsps.add(responses.GET, FEED_URL_2, body=TEST_RSS_2, status=200)
        articles = Client(5).fetch_multiple_feeds(feeds)

    assert len(articles) == 2
    assert articles[0].pub_date > articles[1].pub_date
    assert articles[0].title == "Article 2"
    assert articles[0].feed_name == "Test Feed 2"
    assert articles[1].title == "Article 1"
    assert articles[1].feed_name == "Test Feed 1"


def test_fetch_multiple_feeds_skips_failures():
    feeds = [
        FeedInfo(name="Broken", url=FEED_URL_1),
        FeedInfo(name="Test Feed 2", url=FEED_URL_2),
    ]
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, FEED_URL_1, status=500)
        rsps.add(responses.GET, FEED_URL_2, body=TEST_RSS_2, status=200)
        articles = Client(5).fetch_multiple_feeds(feeds)

    assert [a.title for a in articles] == ["Article 2"]


def test_fetch_multiple_feeds_all_fail():
    feeds = [FeedInfo(name="Broken", url=FEED_URL_1)]
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, FEED_URL_1, status=500)
        with pytest.raises(FeedError, match="failed to fetch any feeds") as info:
            Client(5).fetch_multiple_feeds(feeds)
    assert "Failed to fetch Broken" in str(info.value)


def test_fetch_multiple_feeds_empty_list():
    assert Client(5).fetch_multiple_feeds([]) == []


def test_parse_feed_article_fields():
    feed = parse_feed(TEST_RSS.encode("utf-8"))
    assert feed.channel.items[0].link == "https://example.com/article1"


def test_parse_feed_rejects_other_root():
    with pytest.raises(FeedError, match="rss"):
        parse_feed("<feed><title>x</title></feed>")


def test_parse_feed_rejects_malformed_xml():
    with pytest.raises(FeedError):
        parse_feed("<rss><channel>")


def test_parse_feed_keeps_cdata_text():
    doc = (
        "<rss><channel><item><description><![CDATA[<b>bold</b> text]]>"
        "</description></item></channel></rss>"
    )
    feed = parse_feed(doc)
    assert feed.channel.items[0].description == "<b>bold</b> text"


def test_parse_feed_ignores_text_of_nested_elements():
    feed = parse_feed("<rss><channel><title>a<b>x</b>c</title></channel></rss>")
    assert feed.channel.title == "ac"


def test_parse_feed_items_in_document_order():
    doc = (
        "<rss><channel>"
        "<item><title>first</title></item>"
        "<item><title>second</title></item>"
        "<item><title>third</title></item>"
        "</channel></rss>"
    )
    feed = parse_feed(doc)
    assert [item.title for item in feed.channel.items] == ["first", "second", "third"]


def test_parse_feed_without_channel():
    assert parse_feed("<rss/>") == Feed()


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Mon, 01 Jan 2024 12:00:00 GMT", datetime(2024, 1, 1, 12, tzinfo=timezone.utc)),
        (
            "Mon, 01 Jan 2024 12:00:00 -0700",
            datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=-7))),
        ),
        ("2024-01-01T12:00:00Z", datetime(2024, 1, 1, 12, tzinfo=timezone.utc)),
        ("Tue, 2 Jan 2024 12:00:00 GMT", datetime(2024, 1, 2, 12, tzinfo=timezone.utc)),
        (
            "2024-01-01T12:00:00+02:00",
            datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=2))),
        ),
    ],
)
def test_parse_time_known_formats(text, expected):
    result = parse_time(text)
    assert result == expected
    assert result.utcoffset() == expected.utcoffset()


@pytest.mark.parametrize("text", ["invalid date", "Mon, 31 Feb 2024 12:00:00 GMT", ""])
def test_parse_time_falls_back_to_now(text):
    before = datetime.now(timezone.utc)
    result = parse_time(text)
    after = datetime.now(timezone.utc)
    assert before <= result <= after


def test_article_holds_parsed_date():
    article = Article(
        title="t", link="l", description="d",
        pub_date=parse_time("2024-01-01T12:00:00Z"), feed_name="f",
    )
    assert article.pub_date.year == 2024