
import asyncio
import json
from typing import AsyncGenerator, Optional

import websockets

from lib.config import DEFAULT_KLINE_CONFIG, KlineConfig
from lib.types import KlineUpdate, candle_from_fields, parse_start_ms


def parse_kline_message(raw, topic: str) -> Optional[KlineUpdate]:
    """
    Decode one websocket frame.

    Returns None for frames that are not updates of `topic` (subscribe acks,
    pongs, other topics). Raises ValueError on invalid JSON or a kline
    without a usable `start`.
    """
    message = json.loads(raw)
    if not isinstance(message, dict) or message.get("topic") != topic:
        return None

    data = message.get("data")
    if not isinstance(data, list) or not data or not isinstance(data[0], dict):
        return None

    k = data[0]
    try:
        start = parse_start_ms(k["start"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"kline without valid start: {k!r}") from exc

    return KlineUpdate(
        start=start,
        confirm=bool(k.get("confirm", False)),
        candle=candle_from_fields(start, k.get("open"), k.get("high"), k.get("low"), k.get("close")),
    )


class BybitKlineStream:
    def __init__(self, config: KlineConfig = DEFAULT_KLINE_CONFIG):
        self.config = config

    async def _subscribe(self, ws) -> None:
        """
        Send a subscribe message for the kline topic.
        """
        msg = {
            "op": "subscribe",
            "args": [self.config.topic],
        }
        await ws.send(json.dumps(msg))

    def _decode(self, raw) -> Optional[KlineUpdate]:
        try:
            update = parse_kline_message(raw, self.config.topic)
        except ValueError as exc:
            print(f"[WARN] Dropping kline stream message: {exc}")
            return None

        # Closed candles are already final; only the forming one is forwarded.
        if update is None or update.confirm:
            return None
        return update

    async def stream(self) -> AsyncGenerator[KlineUpdate, None]:
        """
        Async generator that yields in-progress kline updates.

        One connection only: the generator ends when the connection closes
        or fails.
        """
        try:
            async with websockets.connect(
                self.config.ws_url,
                ping_interval=20,
                ping_timeout=20,
            ) as ws:
                print(f"[INFO] Kline stream connected: {self.config.ws_url}")
                await self._subscribe(ws)

                async for raw in ws:
                    update = self._decode(raw)
                    if update is not None:
                        yield update
            print("[INFO] Kline stream connection closed")
        except websockets.ConnectionClosed as exc:
            print(f"[INFO] Kline stream connection closed: {exc}")
        except (OSError, asyncio.TimeoutError, websockets.WebSocketException) as exc:
            print(f"[ERROR] Kline stream error: {exc}")
