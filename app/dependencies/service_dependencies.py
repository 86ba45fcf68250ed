from fastapi import Depends
from fastapi.requests import HTTPConnection
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.session import get_db_session
from app.services.message_service import MessageService
from app.services.notification_service import NotificationService
from app.services.user_service import UserService
from app.utils.websocket_manager import WebsocketManager

def get_websocket_manager(connection: HTTPConnection) -> WebsocketManager:
    """
    Dependency that provides the WebsocketManager created by the application lifespan.
    Works for both HTTP requests and WebSocket connections.
    """
    return connection.app.state.websocket_manager

def get_user_service(db: AsyncSession = Depends(get_db_session)) -> UserService:
    """
    Dependency that provides an instance of UserService with an active database session.
    """
    return UserService(db)

def get_message_service(db: AsyncSession = Depends(get_db_session)) -> MessageService:
    """
    Dependency that provides an instance of MessageService with an active database session.
    """
    return MessageService(db)

def get_notification_service(
    ws_manager: WebsocketManager = Depends(get_websocket_manager),
) -> NotificationService:
    """
    Dependency that provides a NotificationService publishing through the shared WebsocketManager.
    """
    return NotificationService(ws_manager)
