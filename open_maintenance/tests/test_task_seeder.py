"""
Daily seeding rules: daily every day, weekly on Mondays, monthly on the 1st.
"""
from datetime import date

from open_maintenance.services.task_seeder import build_tasks_for, seed_tasks_for
from open_maintenance.services.task_store import TaskStore

TUESDAY = date(2026, 10, 20)
MONDAY = date(2026, 10, 19)
FIRST_OF_MONTH = date(2026, 10, 1)  # a Thursday
MONDAY_FIRST = date(2026, 6, 1)


def slugs(tasks, day):
    suffix = f"-{day.isoformat()}"
    return {t.id[: -len(suffix)] for t in tasks}


def test_regular_day_gets_daily_tasks_only():
    tasks = build_tasks_for(TUESDAY)
    assert slugs(tasks, TUESDAY) == {"agua", "agua-medidores", "solar", "iluminacion"}
    assert all(t.frequency == "daily" for t in tasks)


def test_monday_adds_ramp_inspection():
    tasks = build_tasks_for(MONDAY)
    assert "rampa" in slugs(tasks, MONDAY)
    assert len(tasks) == 5


def test_first_of_month_adds_roof_cleaning():
    tasks = build_tasks_for(FIRST_OF_MONTH)
    assert "azotea" in slugs(tasks, FIRST_OF_MONTH)
    assert "rampa" not in slugs(tasks, FIRST_OF_MONTH)


def test_monday_first_gets_everything():
    assert len(build_tasks_for(MONDAY_FIRST)) == 6


def test_seeded_task_shape():
    task = next(t for t in build_tasks_for(TUESDAY) if t.id == "agua-2026-10-20")
    assert task.date == TUESDAY
    assert task.status == "pending"
    assert task.system == "Cisterna y Tinacos"
    assert task.user == "Técnico"


def test_custom_assignee():
    assert {t.user for t in build_tasks_for(TUESDAY, assignee="Ana")} == {"Ana"}


async def test_seed_inserts_once(db_session):
    store = TaskStore(db_session)
    assert await seed_tasks_for(store, MONDAY) == 5
    assert await seed_tasks_for(store, MONDAY) == 0
    assert await store.count_by_date(MONDAY) == 5


async def test_seed_skips_day_with_existing_tasks(db_session, seed_data):
    store = TaskStore(db_session)
    assert await seed_tasks_for(store, seed_data["today"]) == 0
    assert await store.count_by_date(seed_data["today"]) == 2


async def test_seed_with_purge(db_session, seed_data):
    store = TaskStore(db_session)
    await seed_tasks_for(store, seed_data["today"], purge_past=True)
    assert await store.get("old-1") is None


async def test_seed_keeps_history_by_default(db_session, seed_data):
    store = TaskStore(db_session)
    await seed_tasks_for(store, seed_data["today"])
    assert await store.get("old-1") is not None
