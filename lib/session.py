from __future__ import annotations

import time
from typing import Iterable, Optional

from lib.series import CandleSeries, SeriesOrderError
from lib.types import Candle, KlineUpdate


class ChartSession:
    """
    State shared by the live feed and the backfill:
      - the chart's single candle series
      - the cutoff timestamp (first live start wins)

    Both feeds write through here on the UI thread, so whichever write lands
    last owns any overlapping timestamp. A backfill arriving after live
    updates replaces the series wholesale.
    """

    def __init__(self, series: Optional[CandleSeries] = None):
        self.series = series if series is not None else CandleSeries()
        self._first_live_start: Optional[int] = None

    @property
    def first_live_start(self) -> Optional[int]:
        return self._first_live_start

    def record_live_start(self, start_ms: int) -> None:
        if self._first_live_start is None:
            self._first_live_start = start_ms

    def resolve_cutoff(self, now_ms: Optional[int] = None) -> int:
        if self._first_live_start is not None:
            return self._first_live_start
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        return now_ms

    def apply_live(self, update: KlineUpdate) -> bool:
        """
        Returns True if the update reached the series.
        """
        if update.confirm:
            return False

        self.record_live_start(update.start)

        if not update.candle.is_finite():
            return False

        try:
            self.series.update(update.candle)
        except SeriesOrderError as exc:
            print(f"[WARN] Dropping live kline: {exc}")
            return False
        return True

    def apply_history(self, candles: Iterable[Candle]) -> None:
        self.series.set_data(candles)
