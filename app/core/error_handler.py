from contextlib import contextmanager

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import BaseAPIException, InternalServerErrorException
from app.core.log_config import logger

async def custom_exception_handler(request: Request, exc: BaseAPIException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail}
    )

async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    # Bodies that are not even parseable JSON never reach the route validators.
    logger.warning(f"Rejected unparseable request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request"}
    )

@contextmanager
def internal_error_boundary(detail: str):
    """
    Let service errors through untouched and turn anything else into a 500
    carrying ``detail``, so no internals reach the caller.
    """
    try:
        yield
    except BaseAPIException:
        raise
    except Exception as e:
        logger.error(f"{detail}: {e}", exc_info=True)
        raise InternalServerErrorException(detail=detail) from e
