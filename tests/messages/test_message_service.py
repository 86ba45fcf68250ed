import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import MessageNotSentException
from app.schemas.message import MessageCreate
from app.models.message import Message
from app.models.user import User
from app.services.message_service import MessageService


def message(text: str, day: int, sender: str = "alice") -> MessageCreate:
    return MessageCreate(
        msg=text,
        msgFrom=sender,
        msgDateTime=datetime(2024, 6, day, tzinfo=timezone.utc),
    )


def broken_session() -> MagicMock:
    error = OperationalError("SELECT", {}, Exception("database is locked"))
    session = MagicMock()
    session.execute = AsyncMock(side_effect=error)
    session.commit = AsyncMock(side_effect=error)
    session.refresh = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.mark.asyncio
async def test_save_message(async_session: AsyncSession):
    saved = await MessageService(async_session).save_message(message("hi", 4))
    assert saved.id is not None
    assert saved.msg == "hi"
    assert saved.msg_from == "alice"
    assert saved.msg_date_time.replace(tzinfo=None) == datetime(2024, 6, 4)

@pytest.mark.asyncio
async def test_save_message_defaults_timestamp(async_session: AsyncSession):
    before = datetime.now(timezone.utc).replace(tzinfo=None)
    saved = await MessageService(async_session).save_message(
        MessageCreate(msg="no time given", msgFrom="alice")
    )
    assert saved.msg_date_time.replace(tzinfo=None) >= before

@pytest.mark.asyncio
async def test_save_message_storage_failure():
    session = broken_session()
    with pytest.raises(MessageNotSentException) as exc_info:
        await MessageService(session).save_message(message("hi", 4))
    assert exc_info.value.status_code == 500
    session.rollback.assert_awaited_once()

@pytest.mark.asyncio
async def test_get_messages_sorted_by_timestamp(async_session: AsyncSession):
    message_service = MessageService(async_session)
    for text, day in [("third", 20), ("first", 1), ("second", 9)]:
        await message_service.save_message(message(text, day))

    messages = await message_service.get_messages()
    assert [m.msg for m in messages] == ["first", "second", "third"]

@pytest.mark.asyncio
async def test_get_messages_orders_across_timezones(async_session: AsyncSession):
    message_service = MessageService(async_session)
    # 10:00 at UTC+05:00 is 05:00 UTC, earlier than 06:00 UTC.
    await message_service.save_message(MessageCreate(
        msg="later", msgFrom="bob", msgDateTime="2024-06-04T06:00:00Z",
    ))
    await message_service.save_message(MessageCreate(
        msg="earlier", msgFrom="bob", msgDateTime="2024-06-04T10:00:00+05:00",
    ))

    messages = await message_service.get_messages()
    assert [m.msg for m in messages] == ["earlier", "later"]

@pytest.mark.asyncio
async def test_get_messages_empty(async_session: AsyncSession):
    assert await MessageService(async_session).get_messages() == []

@pytest.mark.asyncio
async def test_get_messages_fails_open():
    assert await MessageService(broken_session()).get_messages() == []

@pytest.mark.asyncio
async def test_get_messages_rolls_back_failed_read():
    session = broken_session()
    assert await MessageService(session).get_messages() == []
    session.rollback.assert_awaited_once()

@pytest.mark.asyncio
async def test_save_message_long_sender(async_session: AsyncSession):
    sender = "s" * 120
    saved = await MessageService(async_session).save_message(message("hi", 4, sender=sender))
    assert saved.msg_from == sender

def test_text_columns_are_unbounded():
    assert User.__table__.c.username.type.length is None
    assert Message.__table__.c.msg_from.type.length is None
