from PySide6.QtCore import QThread, Signal
from lib.loader import HistoricalLoader


class HistoryWorker(QThread):
    # Emitted only on success; the loader logs failures and nothing is applied.
    loaded = Signal(list)

    def __init__(self, loader: HistoricalLoader, end_ms: int):
        super().__init__()
        self.loader = loader
        self.end_ms = end_ms

    def run(self):
        candles = self.loader.fetch(self.end_ms)
        if candles is not None:
            self.loaded.emit(candles)
