from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional

from lib.types import Candle


class SeriesOrderError(ValueError):
    """Raised when an update is older than the series' last point."""


@dataclass(frozen=True)
class SeriesStats:
    size: int
    oldest_time: Optional[int]
    newest_time: Optional[int]


class CandleSeries:
    """
    Single candlestick series, the data side of the chart.

    Guarantees:
      - Strictly increasing `time` across stored candles
      - Only finite candles are stored
      - `update` replaces the last point on equal time, appends on greater
        time and rejects older time
    """

    def __init__(self, interval_seconds: int = 60):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")

        self.interval_seconds = interval_seconds
        self._candles: List[Candle] = []
        self._times: List[int] = []
        self._listeners: List[Callable[[], None]] = []

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set_data(self, candles: Iterable[Candle]) -> None:
        """
        Replace the whole series. Input may be in any order; later duplicates
        of the same time win.
        """
        by_time = {c.time: c for c in candles if c.is_finite()}
        self._candles = sorted(by_time.values(), key=lambda c: c.time)
        self._times = [c.time for c in self._candles]
        self._notify()

    def update(self, candle: Candle) -> None:
        if not candle.is_finite():
            raise ValueError(f"non-finite candle at {candle.time}")

        if self._candles:
            last = self._candles[-1]
            if candle.time < last.time:
                raise SeriesOrderError(
                    f"cannot update time {candle.time}, last is {last.time}"
                )
            if candle.time == last.time:
                self._candles[-1] = candle
                self._notify()
                return

        self._candles.append(candle)
        self._times.append(candle.time)
        self._notify()

    def clear(self) -> None:
        self._candles.clear()
        self._times.clear()
        self._notify()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def latest(self) -> Optional[Candle]:
        return self._candles[-1] if self._candles else None

    def lookup(self, time_s: float) -> Optional[Candle]:
        """
        Returns the candle whose interval [time, time + interval) contains
        `time_s`, or None when outside the plotted range.
        """
        idx = bisect_right(self._times, time_s) - 1
        if idx < 0:
            return None
        candle = self._candles[idx]
        if time_s >= candle.time + self.interval_seconds:
            return None
        return candle

    def as_list(self) -> List[Candle]:
        return list(self._candles)

    def stats(self) -> SeriesStats:
        if not self._candles:
            return SeriesStats(size=0, oldest_time=None, newest_time=None)
        return SeriesStats(
            size=len(self._candles),
            oldest_time=self._candles[0].time,
            newest_time=self._candles[-1].time,
        )

    def __iter__(self) -> Iterator[Candle]:
        return iter(self._candles)

    def __len__(self) -> int:
        return len(self._candles)

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in self._listeners:
            callback()
