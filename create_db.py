# create_db.py
import asyncio
import logging
from shared.db import engine, Base

# Import all models here so they are registered with SQLAlchemy's metadata
import services.identity.models
import services.school_management.models
import services.supervision_management.models

logger = logging.getLogger("create_db")

async def init_models():
    async with engine.begin() as conn:
        logger.info("Creating tables...")
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Tables created.")
    await engine.dispose()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    asyncio.run(init_models())
