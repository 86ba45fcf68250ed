# app/database/redis.py
import redis.asyncio as redis
from typing import Optional
import logging

logger = logging.getLogger(__name__)

class RedisManager:
    def __init__(self, redis_url: str):
        self.redis_url = redis_url
        self.redis: Optional[redis.Redis] = None
    
    async def connect(self):
        """Initialize Redis connection"""
        try:
            self.redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
                health_check_interval=30,
            )
            await self.redis.ping()
            logger.info("Redis connection established")
        except Exception as e:
            logger.error(f"Failed to connect to Redis at {self.redis_url}: {e}")
            raise
    
    async def disconnect(self):
        """Close Redis connection"""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            logger.info("Redis connection closed")

    def pubsub(self):
        """Create a pub/sub handle on the shared connection pool"""
        return self.redis.pubsub()

    async def publish(self, channel: str, message: str) -> int:
        """Publish to a channel; returns how many subscribers received it"""
        return await self.redis.publish(channel, message)
