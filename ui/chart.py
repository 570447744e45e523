from datetime import datetime, timezone
from typing import Callable, List, Sequence

from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel

from matplotlib.figure import Figure
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.patches import Rectangle
import matplotlib.dates as mdates

from lib.config import ChartTheme, DEFAULT_THEME
from lib.series import CandleSeries
from lib.tooltip import CrosshairMove
from lib.types import Candle

SECONDS_PER_DAY = 86400


def to_num(time_s: float) -> float:
    return mdates.date2num(datetime.fromtimestamp(time_s, tz=timezone.utc))


def from_num(x: float) -> float:
    return mdates.num2date(x).timestamp()


def draw_candles(ax, candles: Sequence[Candle], theme: ChartTheme, interval_seconds: int) -> List:
    """
    Draw one wick line and one body rectangle per candle.
    Returns the created artists so the caller can remove them on redraw.
    """
    width = theme.body_width * interval_seconds / SECONDS_PER_DAY
    half_interval = interval_seconds / 2 / SECONDS_PER_DAY
    artists = []

    for c in candles:
        color = theme.up if c.close >= c.open else theme.down
        # center bodies inside their interval
        x = to_num(c.time) + half_interval

        wick, = ax.plot([x, x], [c.low, c.high], color=color, linewidth=1)
        artists.append(wick)

        body = Rectangle(
            (x - width / 2, min(c.open, c.close)),
            width,
            abs(c.close - c.open),
            facecolor=color,
            edgecolor=color if theme.border_visible else "none",
        )
        ax.add_patch(body)
        artists.append(body)

    return artists


class TooltipLabel(QLabel):
    def __init__(self, parent: QWidget, theme: ChartTheme = DEFAULT_THEME):
        super().__init__(parent)
        self.setStyleSheet(
            f"color: {theme.crosshair}; background: transparent; "
            "font-size: 13px; font-family: monospace;"
        )
        self.move(12, 8)
        self.hide()

    def show_text(self, text: str):
        self.setText(text)
        self.adjustSize()
        self.show()
        self.raise_()


class CandleChart(QWidget):
    def __init__(self, series: CandleSeries, theme: ChartTheme = DEFAULT_THEME):
        super().__init__()
        self.series = series
        self.theme = theme

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.figure = Figure(facecolor=theme.background)
        self.canvas = FigureCanvas(self.figure)
        layout.addWidget(self.canvas)
        self.resize(theme.width, theme.height)

        self.ax = self.figure.add_subplot(111)
        self.ax.set_facecolor(theme.background)
        self.ax.tick_params(colors=theme.text)
        for spine in self.ax.spines.values():
            spine.set_color(theme.text)

        if theme.grid_visible:
            self.ax.grid(True, axis="x", color=theme.vert_grid)
            self.ax.grid(True, axis="y", color=theme.horz_grid)

        self.ax.xaxis.set_major_formatter(mdates.DateFormatter(theme.time_format, tz=timezone.utc))
        self.ax.yaxis.tick_right()

        self.vline = self.ax.axvline(x=0, color=theme.crosshair, linestyle="--", linewidth=1, visible=False)
        self.hline = self.ax.axhline(y=0, color=theme.crosshair, linestyle="--", linewidth=1, visible=False)

        self._candle_artists = []
        self._crosshair_callbacks: List[Callable[[CrosshairMove], None]] = []

        self.canvas.mpl_connect("motion_notify_event", self._on_motion)
        self.canvas.mpl_connect("axes_leave_event", self._on_leave)

        series.subscribe(self.refresh_plot)

    def subscribe_crosshair_move(self, callback: Callable[[CrosshairMove], None]):
        self._crosshair_callbacks.append(callback)

    def refresh_plot(self):
        for artist in self._candle_artists:
            artist.remove()

        candles = self.series.as_list()
        interval = self.series.interval_seconds
        self._candle_artists = draw_candles(self.ax, candles, self.theme, interval)

        if candles:
            self.ax.set_xlim(to_num(candles[0].time), to_num(candles[-1].time + interval))

            low = min(c.low for c in candles)
            high = max(c.high for c in candles)
            pad = max((high - low) * 0.05, high * 0.0005, 0.5)
            self.ax.set_ylim(low - pad, high + pad)

        self.canvas.draw_idle()

    def _dispatch(self, move: CrosshairMove):
        for callback in self._crosshair_callbacks:
            callback(move)

    def _on_motion(self, event):
        if event.inaxes is not self.ax or event.xdata is None:
            self._on_leave(event)
            return

        self.vline.set_xdata([event.xdata, event.xdata])
        self.hline.set_ydata([event.ydata, event.ydata])
        self.vline.set_visible(True)
        self.hline.set_visible(True)
        self.canvas.draw_idle()

        time_s = from_num(event.xdata)
        self._dispatch(CrosshairMove(time=time_s, point=self.series.lookup(time_s)))

    def _on_leave(self, event):
        self.vline.set_visible(False)
        self.hline.set_visible(False)
        self.canvas.draw_idle()
        self._dispatch(CrosshairMove(time=None, point=None))
