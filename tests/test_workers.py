"""Tests for the Qt worker threads, run synchronously"""

import pytest

pytest.importorskip("PySide6")

from lib.clients import stream as stream_mod
from lib.loader import HistoricalLoader
from lib.workers.feed import LiveFeedWorker
from lib.workers.history import HistoryWorker


class StubFeed:
    symbol = "BTCUSDT"

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    def fetch_klines(self, end_ms):
        if self.error is not None:
            raise self.error
        return self.result


class TestLiveFeedWorker:
    def test_stop_before_start_never_connects(self, monkeypatch):
        calls = []

        def fake_connect(url, **kwargs):
            calls.append(url)
            raise AssertionError("should not connect")

        monkeypatch.setattr(stream_mod.websockets, "connect", fake_connect)

        worker = LiveFeedWorker()
        worker.stop()
        worker.run()  # called directly: returns instead of waiting for a frame

        assert calls == []


class TestHistoryWorker:
    def test_emits_loaded_on_success(self, candle):
        worker = HistoryWorker(HistoricalLoader(StubFeed(result=[candle])), end_ms=1)
        received = []
        worker.loaded.connect(received.append)

        worker.run()

        assert received == [[candle]]

    def test_silent_on_failure(self, capsys):
        worker = HistoryWorker(HistoricalLoader(StubFeed(error=ValueError("bad payload"))), end_ms=1)
        received = []
        worker.loaded.connect(received.append)

        worker.run()

        assert received == []
        assert "[ERROR]" in capsys.readouterr().out
