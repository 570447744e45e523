"""Shared fixtures for kline chart tests"""

import json

import pytest
import requests

from lib.series import CandleSeries
from lib.session import ChartSession
from lib.types import Candle


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        return json.loads(self.text)


def kline_row(start_ms, o, h, l, c):
    return [str(start_ms), str(o), str(h), str(l), str(c), "1.5", "150000"]


def kline_message(start_ms, o, h, l, c, confirm=False, topic="kline.1.BTCUSDT"):
    return json.dumps({
        "topic": topic,
        "type": "snapshot",
        "ts": start_ms + 1234,
        "data": [{
            "start": start_ms,
            "end": start_ms + 59999,
            "interval": "1",
            "open": str(o),
            "high": str(h),
            "low": str(l),
            "close": str(c),
            "volume": "1.2",
            "turnover": "100000",
            "confirm": confirm,
            "timestamp": start_ms + 1234,
        }],
    })


@pytest.fixture
def series():
    return CandleSeries(interval_seconds=60)


@pytest.fixture
def session(series):
    return ChartSession(series)


@pytest.fixture
def candle():
    return Candle(time=1731232860, open=100.0, high=106.0, low=99.0, close=105.0)
