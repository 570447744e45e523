from dataclasses import dataclass


@dataclass(frozen=True)
class KlineConfig:
    category: str = "spot"
    symbol: str = "BTCUSDT"
    interval: str = "1"            # Bybit interval code, minutes
    interval_seconds: int = 60
    rest_url: str = "https://api.bybit.com/v5/market/kline"
    ws_url: str = "wss://stream.bybit.com/v5/public/spot"
    start_ms: int = 1731232860000  # fixed lower bound of the backfill
    limit: int = 100
    timeout_s: int = 10

    @property
    def topic(self) -> str:
        return f"kline.{self.interval}.{self.symbol}"


@dataclass(frozen=True)
class ChartTheme:
    width: int = 1200
    height: int = 600
    background: str = "#000000"
    text: str = "#595656"
    vert_grid: str = "#cfcaca"
    horz_grid: str = "#bfb7b7"
    grid_visible: bool = False
    crosshair: str = "#afaaaf"
    up: str = "#26a69a"
    down: str = "#ef5350"
    border_visible: bool = False
    time_format: str = "%H:%M"
    body_width: float = 0.7        # fraction of the interval


DEFAULT_KLINE_CONFIG = KlineConfig()
DEFAULT_THEME = ChartTheme()
