# reset_db.py
import asyncio
import logging
from shared.db import engine, Base

import services.identity.models
import services.school_management.models
import services.supervision_management.models

logger = logging.getLogger("reset_db")

async def reset_db():
    async with engine.begin() as conn:
        logger.warning("Dropping all tables...")
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Tables recreated.")
    await engine.dispose()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    asyncio.run(reset_db())
