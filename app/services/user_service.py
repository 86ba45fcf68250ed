from typing import Any, Dict

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    InvalidCredentialsException,
    InvalidInputException,
    StorageException,
    UserAlreadyExistsException,
    UserNotFoundException,
)
from app.core.log_config import logger
from app.core.security import hash_password, verify_password
from app.models.user import User
from app.schemas.user import SafeUser, UserCreate, UserCredentials

UPDATABLE_FIELDS = {"password"}


class UserService:
    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def _find_by_username(self, username: str) -> User | None:
        result = await self.db_session.execute(
            select(User).filter(User.username == username)
        )
        return result.scalar_one_or_none()

    async def create_user(self, request: UserCreate) -> SafeUser:
        """
        Store a new user with a hashed password.

        Args:
            request: Username, plaintext password and join date

        Returns:
            The stored user without its password

        Raises:
            UserAlreadyExistsException: the username is taken
            StorageException: any other storage failure
        """
        user = User(
            username=request.username,
            hashed_password=await run_in_threadpool(hash_password, request.password),
            date_joined=request.date_joined,
        )
        self.db_session.add(user)
        try:
            await self.db_session.commit()
        except IntegrityError as e:
            await self.db_session.rollback()
            logger.info(f"Signup rejected, username '{request.username}' already exists")
            raise UserAlreadyExistsException() from e
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(f"Failed to save user '{request.username}': {e}")
            raise StorageException(detail="Error saving user") from e

        return SafeUser.model_validate(user)

    async def get_user_by_username(self, username: str) -> SafeUser:
        try:
            user = await self._find_by_username(username)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch user '{username}': {e}")
            raise StorageException(detail="Error fetching user data") from e

        if user is None:
            raise UserNotFoundException()
        return SafeUser.model_validate(user)

    async def login_user(self, credentials: UserCredentials) -> SafeUser:
        """
        Return the user whose username and password both match.
        Unknown usernames and wrong passwords fail the same way.
        """
        try:
            user = await self._find_by_username(credentials.username)
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up user '{credentials.username}' for login: {e}")
            raise StorageException(detail="Error logging in user") from e

        if not user or not await run_in_threadpool(
            verify_password, credentials.password, user.hashed_password
        ):
            raise InvalidCredentialsException()
        return SafeUser.model_validate(user)

    async def delete_user_by_username(self, username: str) -> SafeUser:
        try:
            user = await self._find_by_username(username)
            if user is None:
                raise UserNotFoundException()
            deleted = SafeUser.model_validate(user)
            await self.db_session.delete(user)
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(f"Failed to delete user '{username}': {e}")
            raise StorageException(detail="Error deleting user") from e

        logger.info(f"User '{username}' deleted")
        return deleted

    async def update_user(self, username: str, updates: Dict[str, Any]) -> SafeUser:
        """
        Apply ``updates`` to the named user. Only the password may change;
        it is re-hashed before it is stored.
        """
        if not username or not username.strip():
            raise InvalidInputException(detail="Username is required")
        forbidden = set(updates) - UPDATABLE_FIELDS
        if forbidden:
            raise InvalidInputException(
                detail=f"Cannot update field(s): {', '.join(sorted(forbidden))}"
            )

        try:
            user = await self._find_by_username(username)
            if user is None:
                raise UserNotFoundException()
            if "password" in updates:
                user.hashed_password = await run_in_threadpool(hash_password, updates["password"])
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(f"Failed to update user '{username}': {e}")
            raise StorageException(detail="Error updating user") from e

        return SafeUser.model_validate(user)
