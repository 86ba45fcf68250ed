from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from .base import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Message(Base):
    __tablename__ = "messages"

    msg = Column(Text, nullable=False)
    msg_from = Column(String, nullable=False)
    msg_date_time = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)

    def __repr__(self):
        return f"<Message(id={self.id}, msg_from={self.msg_from}, msg='{self.msg[:50]}...')>"
