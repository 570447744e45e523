import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Protocol

from lib.types import Candle


@dataclass(frozen=True)
class CrosshairMove:
    time: Optional[float]          # unix seconds under the pointer
    point: Optional[Candle]        # hovered candle, None outside the data


class TooltipView(Protocol):
    def show_text(self, text: str) -> None: ...

    def hide(self) -> None: ...


CENT = Decimal("0.01")


def to_fixed(value: float) -> str:
    """
    Two-decimal rendering with ties rounded away from zero, on the exact
    binary value (0.125 -> "0.13", not "0.12" as `:.2f` gives).
    """
    if not math.isfinite(value):
        return f"{value:.2f}"
    if value == 0:
        value = 0.0  # no "-0.00"
    return f"{Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP):f}"


def format_ohlc_tooltip(candle: Candle) -> str:
    diff = candle.close - candle.open
    pct = (diff / candle.open) * 100 if candle.open else math.nan
    return (
        f"O: {to_fixed(candle.open)} H: {to_fixed(candle.high)} L: {to_fixed(candle.low)} "
        f"C: {to_fixed(candle.close)} {to_fixed(diff)} ({to_fixed(pct)}%)"
    )


class TooltipPresenter:
    def __init__(self, view: TooltipView):
        self.view = view

    def on_crosshair_move(self, move: Optional[CrosshairMove]) -> None:
        if move is None or move.point is None:
            self.view.hide()
            return

        self.view.show_text(format_ohlc_tooltip(move.point))
