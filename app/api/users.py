from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Depends

from app.core.error_handler import internal_error_boundary
from app.core.exceptions import InvalidInputException
from app.core.validation import (
    INVALID_USER_BODY,
    USERNAME_REQUIRED,
    validate_user_body,
    validate_username,
)
from app.dependencies.service_dependencies import get_user_service
from app.schemas.user import SafeUser, UserCreate
from app.services.user_service import UserService

router = APIRouter(prefix="/user", tags=["users"])

@router.post("/signup", response_model=SafeUser)
async def signup(
    payload: Any = Body(None),
    user_service: UserService = Depends(get_user_service)
):
    """
    Create a user account.
    """
    result = validate_user_body(payload)
    if not result.is_valid:
        raise InvalidInputException(detail=INVALID_USER_BODY)

    credentials = result.data
    new_user = UserCreate(
        username=credentials.username,
        password=credentials.password,
        date_joined=datetime.now(timezone.utc),
    )
    with internal_error_boundary("Error creating user"):
        return await user_service.create_user(new_user)

@router.post("/login", response_model=SafeUser)
async def login(
    payload: Any = Body(None),
    user_service: UserService = Depends(get_user_service)
):
    """
    Check a username/password pair and return the matching user.
    """
    result = validate_user_body(payload)
    if not result.is_valid:
        raise InvalidInputException(detail=INVALID_USER_BODY)

    with internal_error_boundary("Error logging in user"):
        return await user_service.login_user(result.data)

@router.get("/getUser/", response_model=SafeUser, include_in_schema=False)
async def get_user_without_username():
    raise InvalidInputException(detail=USERNAME_REQUIRED)

@router.get("/getUser/{username}", response_model=SafeUser)
async def get_user(
    username: str,
    user_service: UserService = Depends(get_user_service)
):
    """
    Fetch a user by username.
    """
    result = validate_username(username)
    if not result.is_valid:
        raise InvalidInputException(detail=USERNAME_REQUIRED)

    with internal_error_boundary("Error fetching user data"):
        return await user_service.get_user_by_username(result.data)

@router.delete("/deleteUser/{username}", response_model=SafeUser)
async def delete_user(
    username: str,
    user_service: UserService = Depends(get_user_service)
):
    """
    Delete a user by username and return the removed record.
    """
    result = validate_username(username)
    if not result.is_valid:
        raise InvalidInputException(detail=USERNAME_REQUIRED)

    with internal_error_boundary("Error deleting user"):
        return await user_service.delete_user_by_username(result.data)

@router.patch("/resetPassword", response_model=SafeUser)
async def reset_password(
    payload: Any = Body(None),
    user_service: UserService = Depends(get_user_service)
):
    """
    Replace a user's password.
    """
    result = validate_user_body(payload)
    if not result.is_valid:
        raise InvalidInputException(detail=INVALID_USER_BODY)

    credentials = result.data
    with internal_error_boundary("Error resetting password"):
        return await user_service.update_user(
            credentials.username, {"password": credentials.password}
        )
