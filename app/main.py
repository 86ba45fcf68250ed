from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.error_handler import custom_exception_handler, request_validation_exception_handler
from app.core.exceptions import BaseAPIException
from app.core.log_config import logger

from app.api.messages import router as message_router
from app.api.users import router as user_router
from app.api.websocket import router as websocket_router
from app.database.redis import RedisManager
from app.database.session import initialize_db
from app.utils.timing_middleware import TimingMiddleware
from app.utils.websocket_manager import WebsocketManager


@asynccontextmanager
async def lifespan(app: FastAPI):
    await initialize_db()
    redis_manager = RedisManager(settings.redis_url) if settings.redis_url else None
    websocket_manager = WebsocketManager(redis_manager)
    await websocket_manager.start()
    app.state.websocket_manager = websocket_manager
    logger.info("Messaging backend started.")
    yield
    await websocket_manager.close()

app = FastAPI(title="Messaging Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(BaseAPIException, custom_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_middleware(TimingMiddleware)

app.include_router(user_router)
app.include_router(message_router)
app.include_router(websocket_router)
