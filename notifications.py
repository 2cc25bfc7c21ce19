"""
Best-effort notification fan-out.

Services receive a `Notifier` and call `publish(event, payload, channel)`.
Nothing here may raise into the caller or block the request path: the
WebSocket notifier only schedules delivery onto the event loop that owns the
sockets and logs whatever goes wrong.
"""

import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Set

from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder

logger = logging.getLogger(__name__)


def topic_channel(topic_id: str) -> str:
    return f"topic-{topic_id}"


class Notifier(ABC):
    @abstractmethod
    def publish(self, event_type: str, payload, channel: Optional[str] = None) -> None:
        """Deliver an event to `channel` subscribers, or to everyone when None."""


class NullNotifier(Notifier):
    """Used when notifications are disabled by configuration."""

    def publish(self, event_type: str, payload, channel: Optional[str] = None) -> None:
        return None


class ChannelHub:
    """Connected sockets and their channel memberships."""

    def __init__(self):
        self._sockets: Set[WebSocket] = set()
        self._channels: Dict[str, Set[WebSocket]] = {}
        self._lock = threading.Lock()
        self.loop: Optional[asyncio.AbstractEventLoop] = None

    async def connect(self, websocket: WebSocket) -> None:
        with self._lock:
            self.loop = asyncio.get_running_loop()
            self._sockets.add(websocket)
            open_count = len(self._sockets)
        await websocket.accept()
        logger.debug(f"Socket connected ({open_count} open)")

    def disconnect(self, websocket: WebSocket) -> None:
        with self._lock:
            self._sockets.discard(websocket)
            for members in self._channels.values():
                members.discard(websocket)
            self._channels = {k: v for k, v in self._channels.items() if v}

    def join(self, websocket: WebSocket, channel: str) -> None:
        with self._lock:
            self._channels.setdefault(channel, set()).add(websocket)

    def leave(self, websocket: WebSocket, channel: str) -> None:
        with self._lock:
            members = self._channels.get(channel)
            if members is not None:
                members.discard(websocket)
                if not members:
                    del self._channels[channel]

    def targets(self, channel: Optional[str] = None) -> List[WebSocket]:
        with self._lock:
            if channel is None:
                return list(self._sockets)
            return list(self._channels.get(channel, ()))

    @property
    def connection_count(self) -> int:
        with self._lock:
            return len(self._sockets)


class WebSocketNotifier(Notifier):
    def __init__(self, hub: ChannelHub):
        self.hub = hub

    def publish(self, event_type: str, payload, channel: Optional[str] = None) -> None:
        try:
            loop = self.hub.loop
            targets = self.hub.targets(channel)
            if loop is None or loop.is_closed() or not targets:
                logger.debug(f"Event {event_type} not emitted: no subscribers")
                return
            message = {"event": event_type, "data": jsonable_encoder(payload)}
            future = asyncio.run_coroutine_threadsafe(self._deliver(message, targets), loop)
            future.add_done_callback(self._report)
            scope = f"room {channel}" if channel else "all clients"
            logger.debug(f"Emitted {event_type} to {scope}")
        except Exception as e:
            logger.error(f"Socket emit error ({event_type}): {e}")

    async def _deliver(self, message: dict, targets: List[WebSocket]) -> None:
        for websocket in targets:
            try:
                await websocket.send_json(message)
            except Exception as e:
                logger.warning(f"Dropping socket after failed send of {message['event']}: {e}")
                self.hub.disconnect(websocket)

    @staticmethod
    def _report(future) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error(f"Socket delivery failed: {exc}")

