from typing import Any, List

from fastapi import APIRouter, Body, Depends, status

from app.core.error_handler import internal_error_boundary
from app.core.exceptions import InvalidInputException
from app.core.validation import validate_add_message_request
from app.dependencies.service_dependencies import get_message_service, get_notification_service
from ..schemas.message import MessageResponse
from ..services.message_service import MessageService
from ..services.notification_service import NotificationService

router = APIRouter(prefix="/messaging", tags=["messages"])

@router.post("/addMessage", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_message(
    payload: Any = Body(None),
    message_service: MessageService = Depends(get_message_service),
    notification_service: NotificationService = Depends(get_notification_service)
):
    """
    Store a message and announce it to connected listeners.

    Args:
        payload: ``{"messageToAdd": {"msg", "msgFrom", "msgDateTime"}}``
        message_service: Message service instance
        notification_service: Publishes the ``messageUpdate`` event

    Returns:
        The stored message, including its generated id
    """
    result = validate_add_message_request(payload)
    if not result.is_valid:
        raise InvalidInputException(detail=result.errors[0])

    with internal_error_boundary("Error saving message"):
        message = await message_service.save_message(result.data)
        await notification_service.publish_message_update(message)
        return message

@router.get("/getMessages", response_model=List[MessageResponse])
async def get_messages(
    message_service: MessageService = Depends(get_message_service)
):
    """
    All messages, oldest first.
    """
    with internal_error_boundary("Error fetching messages"):
        return await message_service.get_messages()
