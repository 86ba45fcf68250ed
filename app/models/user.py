from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from app.models.base import Base

class User(Base):
    __tablename__ = "users"

    username = Column(String, unique=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    date_joined = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
