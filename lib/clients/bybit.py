# lib/clients/bybit.py

import requests
from typing import Any, List
from lib.types import Candle, candle_from_fields
from lib.Feed import Feed


class KlineApiError(Exception):
    """Application-level error reported in a kline response body."""

    def __init__(self, ret_code: Any, ret_msg: str):
        super().__init__(f"API error {ret_code}: {ret_msg}")
        self.ret_code = ret_code
        self.ret_msg = ret_msg


class BybitKlineClient(Feed):
    def fetch_klines(self, end_ms: int) -> List[Candle]:
        params = {
            "category": self.config.category,
            "symbol": self.symbol,
            "interval": self.interval,
            "start": self.config.start_ms,
            "end": end_ms,
            "limit": self.config.limit,
        }
        r = requests.get(self.config.rest_url, params=params, timeout=self.config.timeout_s)
        r.raise_for_status()

        return parse_kline_response(r.json())


def parse_kline_response(payload: Any) -> List[Candle]:
    """
    Bybit response format:
      { retCode: 0, result: { list: [[startMs, open, high, low, close, volume, turnover], ...] } }
    Prices are numeric strings; the list is newest-first.
    """
    if not isinstance(payload, dict):
        raise KlineApiError(None, "response is not an object")

    ret_code = payload.get("retCode")
    ret_msg = payload.get("retMsg", "")
    if ret_code != 0:
        raise KlineApiError(ret_code, ret_msg)

    result = payload.get("result")
    rows = result.get("list") if isinstance(result, dict) else None
    if not isinstance(rows, list):
        raise KlineApiError(ret_code, "missing result.list")

    candles = []
    for k in rows:
        if not isinstance(k, (list, tuple)) or len(k) < 5:
            continue
        try:
            candle = candle_from_fields(k[0], k[1], k[2], k[3], k[4])
        except (TypeError, ValueError):
            continue  # unparseable start time
        if candle.is_finite():
            candles.append(candle)

    # Bybit returns candles newest-first
    return sorted(candles, key=lambda c: c.time)
