import json
from datetime import timedelta
from pathlib import Path

import pytest

from rsss.config import (
    Config,
    FeedConfig,
    SeenArticles,
    default_config,
    load,
    load_feeds,
    load_seen_articles,
)
from rsss.rss import FeedInfo


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    return tmp_path


def test_default_config(home):
    config = default_config()

    assert config.refresh_rate == timedelta(minutes=5)
    assert config.color_theme == "default"
    assert config.enable_notifications is True
    assert config.feeds_file != ""
    assert config.config_file != ""
    config_dir = home / ".config" / "rsss"
    assert config.feeds_file == str(config_dir / "feeds.json")
    assert config.seen_articles_file == str(config_dir / "seen.json")
    assert config.config_file == str(config_dir / "config.json")


def test_load_without_file_returns_defaults(home):
    assert load() == default_config()


def test_config_save_writes_file(tmp_path):
    config_file = tmp_path / "config.json"
    config = Config(
        refresh_rate=timedelta(minutes=10),
        feeds_file=str(tmp_path / "feeds.json"),
        color_theme="dark",
        config_file=str(config_file),
    )

    config.save()

    assert config_file.exists()
    data = json.loads(config_file.read_text(encoding="utf-8"))
    assert set(data) == {
        "refresh_rate",
        "feeds_file",
        "color_theme",
        "seen_articles_file",
        "enable_notifications",
    }
    assert data["color_theme"] == "dark"


def test_config_save_load_round_trip(home):
    config = default_config()
    config.refresh_rate = timedelta(minutes=10)
    config.color_theme = "dark"
    config.enable_notifications = False

    config.save()
    loaded = load()

    assert loaded == config


def test_load_partial_file_keeps_other_defaults(home):
    path = Path(default_config().config_file)
    path.parent.mkdir(parents=True)
    path.write_text('{"color_theme": "ocean"}', encoding="utf-8")

    loaded = load()

    assert loaded.color_theme == "ocean"
    assert loaded.refresh_rate == timedelta(minutes=5)
    assert loaded.enable_notifications is True


def test_load_matches_keys_case_insensitively(home):
    path = Path(default_config().config_file)
    path.parent.mkdir(parents=True)
    path.write_text('{"Color_Theme": "dark"}', encoding="utf-8")

    assert load().color_theme == "dark"


def test_load_rejects_wrong_type(home):
    path = Path(default_config().config_file)
    path.parent.mkdir(parents=True)
    path.write_text('{"enable_notifications": "yes"}', encoding="utf-8")

    with pytest.raises(ValueError):
        load()


def test_load_rejects_invalid_json(home):
    path = Path(default_config().config_file)
    path.parent.mkdir(parents=True)
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError):
        load()


def test_load_feeds_creates_defaults(tmp_path):
    feeds_file = tmp_path / "feeds.json"

    feeds = load_feeds(feeds_file)

    assert [feed.name for feed in feeds.feeds] == ["BBC News", "TechCrunch"]
    assert feeds_file.exists()
    assert load_feeds(feeds_file) == feeds


def test_feed_config_save_and_load(tmp_path):
    feeds_file = tmp_path / "feeds.json"
    feeds = FeedConfig([FeedInfo(name="Test Feed", url="https://example.com/feed.xml")])

    feeds.save(feeds_file)

    assert feeds_file.exists()
    loaded = load_feeds(feeds_file)
    assert len(loaded.feeds) == 1
    assert loaded.feeds[0].name == "Test Feed"
    assert loaded.feeds[0].url == "https://example.com/feed.xml"


def test_feed_config_save_creates_directory(tmp_path):
    feeds_file = tmp_path / "nested" / "dir" / "feeds.json"
    FeedConfig().save(feeds_file)
    assert load_feeds(feeds_file) == FeedConfig()


def test_load_feeds_null_list_is_empty(tmp_path):
    feeds_file = tmp_path / "feeds.json"
    feeds_file.write_text('{"feeds": null}', encoding="utf-8")
    assert load_feeds(feeds_file).feeds == []


def test_load_feeds_rejects_non_list(tmp_path):
    feeds_file = tmp_path / "feeds.json"
    feeds_file.write_text('{"feeds": "x"}', encoding="utf-8")
    with pytest.raises(ValueError):
        load_feeds(feeds_file)


def test_load_seen_articles_missing_file(tmp_path):
    assert load_seen_articles(tmp_path / "seen.json").articles == {}


def test_seen_articles_round_trip(tmp_path):
    seen_file = tmp_path / "seen.json"
    seen = SeenArticles(
        {"https://example.com/1": True, "https://example.com/2": True}
    )

    seen.save(seen_file)

    assert load_seen_articles(seen_file) == seen


def test_saved_json_escapes_html_characters(tmp_path):
    seen_file = tmp_path / "seen.json"
    link = "https://example.com/?a=1&b=<2>"
    SeenArticles({link: True}).save(seen_file)

    text = seen_file.read_text(encoding="utf-8")
    assert "&" not in text and "<" not in text
    assert load_seen_articles(seen_file).articles == {link: True}