"""Create the database tables (inquiries and its unique per-day constraint)."""

import asyncio

from sqlalchemy.ext.asyncio import create_async_engine

from nexus_site.config import settings
from nexus_site.models import Base


async def init_db():
    """Create all tables that do not exist yet."""
    engine = create_async_engine(settings.database_url)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await engine.dispose()

    for table in Base.metadata.sorted_tables:
        print(f"  + Table: {table.name}")
    print("Database ready.")


if __name__ == "__main__":
    asyncio.run(init_db())
