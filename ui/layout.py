from PySide6.QtCore import Slot
from PySide6.QtWidgets import QWidget, QVBoxLayout

from lib.clients.bybit import BybitKlineClient
from lib.config import DEFAULT_KLINE_CONFIG, DEFAULT_THEME, KlineConfig, ChartTheme
from lib.loader import HistoricalLoader
from lib.series import CandleSeries
from lib.session import ChartSession
from lib.tooltip import TooltipPresenter
from lib.workers.feed import LiveFeedWorker
from lib.workers.history import HistoryWorker
from ui.chart import CandleChart, TooltipLabel


class MainLayout(QWidget):
    def __init__(
        self,
        config: KlineConfig = DEFAULT_KLINE_CONFIG,
        theme: ChartTheme = DEFAULT_THEME,
    ):
        super().__init__()
        self.config = config

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.session = ChartSession(CandleSeries(config.interval_seconds))

        self.chart = CandleChart(self.session.series, theme)
        layout.addWidget(self.chart)

        self.tooltip = TooltipLabel(self.chart, theme)
        self.presenter = TooltipPresenter(self.tooltip)
        self.chart.subscribe_crosshair_move(self.presenter.on_crosshair_move)

        self.feed_worker = LiveFeedWorker(config)
        self.feed_worker.kline_received.connect(self._on_kline)
        self.feed_worker.start()

        # The feed connects asynchronously, so this usually falls back to now.
        end_ms = self.session.resolve_cutoff()
        self.history_worker = HistoryWorker(HistoricalLoader(BybitKlineClient(config)), end_ms)
        self.history_worker.loaded.connect(self._on_history)
        self.history_worker.start()

    @Slot(object)
    def _on_kline(self, update):
        self.session.apply_live(update)

    @Slot(list)
    def _on_history(self, candles):
        self.session.apply_history(candles)

    def shutdown(self):
        self.feed_worker.stop()
        self.feed_worker.wait()
        self.history_worker.wait()
