import asyncio
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.log_config import logger
from app.database.session import engine, initialize_db


async def create_tables():
    """
    Create the users and messages tables in the configured database.
    """
    await initialize_db()
    await engine.dispose()
    logger.info("Tables created.")

if __name__ == "__main__":
    asyncio.run(create_tables())
