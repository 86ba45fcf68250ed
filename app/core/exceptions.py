# app/core/exceptions.py

from fastapi import HTTPException, status

# Base Exception
class BaseAPIException(HTTPException):
    """Base class for all custom API exceptions."""
    def __init__(self, status_code: int, detail: str, headers: dict = None):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


# Authentication Exceptions
class InvalidCredentialsException(BaseAPIException):
    """Exception raised when no user matches the given username and password."""
    def __init__(self, detail="Invalid credentials / user not found"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


# User Exceptions
class UserAlreadyExistsException(BaseAPIException):
    """Exception raised when the username is already taken."""
    def __init__(self, detail="Username already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class UserNotFoundException(BaseAPIException):
    """Exception raised when a user is not found."""
    def __init__(self, detail="User not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


# Message Exceptions
class MessageNotSentException(BaseAPIException):
    """Exception raised when a message could not be stored."""
    def __init__(self, detail="Error saving message to database"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


# Validation & Input Exceptions
class InvalidInputException(BaseAPIException):
    """Exception raised when input data is invalid."""
    def __init__(self, detail="Invalid request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


# Database & System Exceptions
class StorageException(BaseAPIException):
    """Exception raised when a storage operation fails."""
    def __init__(self, detail="Storage operation failed"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)

class InternalServerErrorException(BaseAPIException):
    """Exception raised for internal server errors."""
    def __init__(self, detail="Internal server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
