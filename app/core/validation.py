"""
Request validation for the user and messaging routes.

Each validator takes the raw decoded JSON (or path value) and returns a
``ValidationResult`` instead of raising, so routes decide the status code and
message themselves before any service is touched.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ValidationError

from app.schemas.message import MessageCreate
from app.schemas.user import UserCredentials

INVALID_USER_BODY = "Invalid user body"
USERNAME_REQUIRED = "Username is required"
INVALID_REQUEST = "Invalid request"
INVALID_MESSAGE_DATA = "Invalid message data"


class ValidationResult(BaseModel):
    is_valid: bool
    data: Optional[Any] = None
    errors: List[str] = []

    @classmethod
    def ok(cls, data: Any) -> "ValidationResult":
        return cls(is_valid=True, data=data)

    @classmethod
    def fail(cls, *errors: str) -> "ValidationResult":
        return cls(is_valid=False, errors=list(errors))


def _error_messages(exc: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
        for err in exc.errors()
    ]


def validate_user_body(payload: Any) -> ValidationResult:
    """
    Require non-empty ``username`` and ``password`` strings.
    On success ``data`` is a ``UserCredentials`` with the username trimmed.
    """
    try:
        return ValidationResult.ok(UserCredentials.model_validate(payload))
    except ValidationError as e:
        return ValidationResult.fail(*_error_messages(e))


def validate_username(username: Optional[str]) -> ValidationResult:
    username = (username or "").strip()
    if not username:
        return ValidationResult.fail("username: must not be empty")
    return ValidationResult.ok(username)


def validate_add_message_request(payload: Any) -> ValidationResult:
    """
    Check the ``{"messageToAdd": {...}}`` envelope, then the message itself.

    A missing or non-object envelope is reported as ``INVALID_REQUEST``; a bad
    message inside a well-formed envelope as ``INVALID_MESSAGE_DATA``. The
    first entry of ``errors`` is always one of those two.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("messageToAdd"), dict):
        return ValidationResult.fail(INVALID_REQUEST)

    message = payload["messageToAdd"]
    if message.get("msgDateTime") is None:
        return ValidationResult.fail(INVALID_MESSAGE_DATA, "msgDateTime: field required")
    try:
        return ValidationResult.ok(MessageCreate.model_validate(message))
    except ValidationError as e:
        return ValidationResult.fail(INVALID_MESSAGE_DATA, *_error_messages(e))
