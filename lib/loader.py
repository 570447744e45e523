from typing import List, Optional

import requests

from lib.Feed import Feed
from lib.clients.bybit import KlineApiError
from lib.types import Candle


class HistoricalLoader:
    """
    One-shot backfill: a single request, no retry, no partial application.
    The caller hands a non-None result to `ChartSession.apply_history`.
    """

    def __init__(self, feed: Feed):
        self.feed = feed

    def fetch(self, end_ms: int) -> Optional[List[Candle]]:
        try:
            candles = self.feed.fetch_klines(end_ms)
        except (requests.RequestException, KlineApiError, ValueError) as exc:
            print(f"[ERROR] Historical kline load failed for {self.feed.symbol}: {exc}")
            return None

        print(f"[INFO] Got {len(candles)} historical candles for {self.feed.symbol}")
        return candles
