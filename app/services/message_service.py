from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import MessageNotSentException
from app.core.log_config import logger
from app.models.message import Message
from app.schemas.message import MessageCreate, MessageResponse


class MessageService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def save_message(self, request: MessageCreate) -> MessageResponse:
        """
        Store a message. A missing timestamp defaults to the time of insert.
        """
        message = Message(msg=request.msg, msg_from=request.msg_from)
        if request.msg_date_time is not None:
            message.msg_date_time = request.msg_date_time
        self.db.add(message)
        try:
            await self.db.commit()
            await self.db.refresh(message)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to save message from '{request.msg_from}': {e}")
            raise MessageNotSentException() from e

        return MessageResponse.model_validate(message)

    async def get_messages(self) -> List[MessageResponse]:
        """
        Every message, oldest first. Storage failures yield an empty list.
        """
        try:
            result = await self.db.execute(
                select(Message).order_by(Message.msg_date_time.asc())
            )
            messages = result.scalars().all()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(f"Failed to fetch messages, returning none: {e}")
            return []

        return [MessageResponse.model_validate(msg) for msg in messages]
