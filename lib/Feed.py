# lib/Feed.py

from abc import ABC, abstractmethod
from typing import List
from lib.config import DEFAULT_KLINE_CONFIG, KlineConfig
from lib.types import Candle

class Feed(ABC):
    def __init__(self, config: KlineConfig = DEFAULT_KLINE_CONFIG):
        self.config = config
        self.symbol = config.symbol
        self.interval = config.interval

    @abstractmethod
    def fetch_klines(self, end_ms: int) -> List[Candle]:
        """
        Fetch up to `config.limit` candles ending at `end_ms`.
        Must return finite candles in ascending time order.
        """
        raise NotImplementedError
