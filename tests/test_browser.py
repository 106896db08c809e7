import subprocess
import sys

import pytest

from rsss.browser import BrowserError, open_url

URL = "https://example.com/article"


class _Recorder:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def __call__(self, args, **kwargs):
        if self.error is not None:
            raise self.error
        self.calls.append(list(args))
        return object()


@pytest.mark.parametrize(
    ("platform", "expected"),
    [
        ("linux", ["xdg-open", URL]),
        ("darwin", ["open", URL]),
        ("win32", ["cmd", "/c", "start", URL]),
    ],
)
def test_open_url_runs_platform_opener(monkeypatch, platform, expected):
    recorder = _Recorder()
    monkeypatch.setattr(sys, "platform", platform)
    monkeypatch.setattr(subprocess, "Popen", recorder)

    result = open_url(URL)

    assert result is None
    assert recorder.calls == [expected]


def test_open_url_unsupported_platform(monkeypatch):
    recorder = _Recorder()
    monkeypatch.setattr(sys, "platform", "plan9")
    monkeypatch.setattr(subprocess, "Popen", recorder)

    with pytest.raises(BrowserError, match="unsupported platform: plan9"):
        open_url(URL)
    assert recorder.calls == []


def test_open_url_start_failure(monkeypatch):
    recorder = _Recorder(error=FileNotFoundError("missing opener"))
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setattr(subprocess, "Popen", recorder)

    with pytest.raises(BrowserError, match="xdg-open"):
        open_url(URL)
    assert recorder.calls == []