from PySide6.QtCore import QThread, Signal
import asyncio
from typing import Optional
from lib.clients.stream import BybitKlineStream
from lib.config import DEFAULT_KLINE_CONFIG, KlineConfig


class LiveFeedWorker(QThread):
    # KlineUpdate; delivered on the receiver's (UI) thread
    kline_received = Signal(object)

    def __init__(self, config: KlineConfig = DEFAULT_KLINE_CONFIG):
        super().__init__()
        self.config = config
        self._running = True
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._task: Optional[asyncio.Task] = None

    def run(self):
        try:
            asyncio.run(self._run())
        except asyncio.CancelledError:
            pass  # stop() requested

    async def _run(self):
        self._loop = asyncio.get_running_loop()
        self._task = asyncio.current_task()
        # stop() may have run before the loop existed
        if not self._running:
            return

        stream = BybitKlineStream(self.config)
        async for update in stream.stream():
            if not self._running:
                break
            self.kline_received.emit(update)

    def stop(self):
        self._running = False
        if self._loop is not None and self._task is not None and not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._task.cancel)
