# lib/types.py

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Candle:
    time: int              # unix seconds (candle start)
    open: float
    high: float
    low: float
    close: float

    def is_finite(self) -> bool:
        return all(
            math.isfinite(v) for v in (self.open, self.high, self.low, self.close)
        )


@dataclass(frozen=True)
class KlineUpdate:
    start: int             # unix ms, as sent by the exchange
    confirm: bool          # True once the interval has closed
    candle: Candle


def parse_price(value) -> float:
    """
    Parse a price field (number or numeric string).
    Unparseable values become NaN so the candle is dropped downstream.
    """
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def parse_start_ms(value) -> int:
    """
    Parse a candle start time in ms. Infinite values (JSON `1e400`) raise
    ValueError like any other unusable start.
    """
    try:
        return int(value)
    except OverflowError as exc:
        raise ValueError(f"non-finite start time: {value!r}") from exc


def candle_from_fields(start_ms, open_, high, low, close) -> Candle:
    return Candle(
        time=parse_start_ms(start_ms) // 1000,
        open=parse_price(open_),
        high=parse_price(high),
        low=parse_price(low),
        close=parse_price(close),
    )
