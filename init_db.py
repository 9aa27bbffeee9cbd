"""Initialize database tables and seed a day's maintenance tasks"""
import asyncio
import sys
from datetime import date

from open_maintenance.database import engine, Base, AsyncSessionLocal
from open_maintenance.models import *  # noqa: F401,F403 - Import all models to register them
from open_maintenance.services.task_seeder import seed_tasks_for
from open_maintenance.services.task_store import TaskStore
from open_maintenance.utils.helpers import site_today


async def init(day: date):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("Database tables created successfully.")

    async with AsyncSessionLocal() as session:
        inserted = await seed_tasks_for(TaskStore(session), day)
    print(f"Seeded {inserted} tasks for {day.isoformat()}.")

    await engine.dispose()


if __name__ == "__main__":
    # Optional argument: YYYY-MM-DD (defaults to today at the site)
    target = date.fromisoformat(sys.argv[1]) if len(sys.argv) > 1 else site_today()
    asyncio.run(init(target))
