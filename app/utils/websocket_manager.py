import asyncio
import logging
from typing import Dict, Optional
from uuid import uuid4

from fastapi import WebSocket

from app.database.redis import RedisManager

logger = logging.getLogger(__name__)

# Every process subscribes to this channel and relays what it hears to its own sockets.
EVENTS_CHANNEL = "messaging:events"


class WebsocketManager:
    """
    Broadcast handle for connected WebSocket listeners.

    Delivery is fire-and-forget and at-most-once: an event reaches the sockets
    registered when it is delivered and nobody else. With a ``RedisManager``
    the event is published on ``EVENTS_CHANNEL`` and every process relays it
    to its own sockets; without one, delivery stays in this process.

    One instance is created by the application lifespan and injected where
    it is needed.
    """

    def __init__(self, redis_manager: Optional[RedisManager] = None):
        self.redis_manager = redis_manager
        self.pubsub = None
        self.listener_task: Optional[asyncio.Task] = None

        self.active_connections: Dict[str, WebSocket] = {}

    async def start(self):
        """Connects to Redis, when configured, and starts the relay task."""
        if self.redis_manager is None:
            logger.info("No Redis configured, broadcasting in-process only.")
            return

        await self.redis_manager.connect()
        self.pubsub = self.redis_manager.pubsub()
        await self.pubsub.subscribe(EVENTS_CHANNEL)
        self.listener_task = asyncio.create_task(self._pubsub_listener())

    async def close(self):
        """Stops the relay task and releases Redis resources."""
        if self.listener_task:
            self.listener_task.cancel()
            try:
                await self.listener_task
            except asyncio.CancelledError:
                pass
        if self.pubsub:
            await self.pubsub.unsubscribe()
            await self.pubsub.aclose()
        if self.redis_manager:
            await self.redis_manager.disconnect()
        self.active_connections.clear()
        logger.info("WebsocketManager resources closed.")

    async def connect(self, websocket: WebSocket) -> str:
        """Accepts a listener and returns the id it is registered under."""
        await websocket.accept()
        connection_id = str(uuid4())
        self.active_connections[connection_id] = websocket
        logger.info(f"Listener {connection_id} connected ({len(self.active_connections)} active).")
        return connection_id

    def disconnect(self, connection_id: str):
        if self.active_connections.pop(connection_id, None) is not None:
            logger.info(f"Listener {connection_id} disconnected ({len(self.active_connections)} active).")

    async def broadcast(self, message: str):
        """Sends ``message`` to every listener. Never raises on delivery failure."""
        if self.redis_manager is None:
            await self._send_to_local_websockets(message)
            return

        try:
            await self.redis_manager.publish(EVENTS_CHANNEL, message)
        except Exception as e:
            logger.warning(f"Failed to publish event to Redis, event dropped: {e}")

    async def _send_to_local_websocket(self, connection_id: str, websocket: WebSocket, message: str):
        try:
            await websocket.send_text(message)
        except Exception as e:
            logger.warning(f"Dropping listener {connection_id} after failed send: {e}")
            self.disconnect(connection_id)

    async def _send_to_local_websockets(self, message: str):
        """Sends directly to the sockets connected to this process."""
        tasks = [
            self._send_to_local_websocket(connection_id, websocket, message)
            for connection_id, websocket in list(self.active_connections.items())
        ]
        await asyncio.gather(*tasks)

    async def _pubsub_listener(self):
        """Relays events published by any process to the local listeners."""
        logger.info("Pub/Sub listener started.")
        try:
            async for message in self.pubsub.listen():
                if message["type"] != "message" or message["channel"] != EVENTS_CHANNEL:
                    continue
                await self._send_to_local_websockets(message["data"])
        except asyncio.CancelledError:
            logger.info("Pub/Sub listener task cancelled.")
            raise
        except Exception as e:
            logger.critical(f"Pub/Sub listener crashed: {e}", exc_info=True)
        finally:
            logger.info("Pub/Sub listener stopped.")
