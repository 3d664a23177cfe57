# shared/db.py
import os
from datetime import datetime, timezone
from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

load_dotenv()

# Local SQLite file when no DATABASE_URL is set
DATABASE_URL = os.getenv("DATABASE_URL") or "sqlite+aiosqlite:///./supervisi.db"

if DATABASE_URL.startswith("sqlite"):
    engine = create_async_engine(DATABASE_URL, connect_args={"check_same_thread": False})
else:
    engine = create_async_engine(DATABASE_URL, pool_pre_ping=True)

SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_db():
    async with SessionLocal() as db:
        yield db


def utcnow():
    return datetime.now(timezone.utc)
