import json

from app.core.log_config import logger
from app.schemas.message import MessageResponse
from app.utils.websocket_manager import WebsocketManager

MESSAGE_UPDATE_EVENT = "messageUpdate"


class NotificationService:
    def __init__(self, websocket_manager: WebsocketManager):
        self.websocket_manager = websocket_manager

    async def publish_message_update(self, message: MessageResponse):
        """
        Broadcast a newly stored message to every connected listener as
        ``{"type": "messageUpdate", "data": {"message": {...}}}``.
        """
        event_payload = {
            "type": MESSAGE_UPDATE_EVENT,
            "data": {"message": message.model_dump(mode="json", by_alias=True)},
        }
        await self.websocket_manager.broadcast(json.dumps(event_payload))
        logger.debug(f"Published {MESSAGE_UPDATE_EVENT} for message {message.id}")
