"""
Daily task provisioning for the Torre K building.

Builds the day's task list from fixed templates: daily checks every day,
weekly checks on Mondays and monthly checks on the first of the month.
Ids embed the date, so seeding the same day twice never collides.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from open_maintenance.config import get_settings
from open_maintenance.models.task import MaintenanceTask, TaskFrequency, TaskStatus
from open_maintenance.services.task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskTemplate:
    slug: str
    area: str
    system: str
    activity: str
    frequency: TaskFrequency


TASK_TEMPLATES = [
    # Daily
    TaskTemplate("agua", "Sistema Hidráulico", "Cisterna y Tinacos",
                 "Revisar niveles de agua (FL-16)", TaskFrequency.DAILY),
    TaskTemplate("agua-medidores", "Sanitarios", "Medidores",
                 "Lectura de medidores y detección de fugas (WC, llaves)", TaskFrequency.DAILY),
    TaskTemplate("solar", "Azotea", "Paneles Solares",
                 "Revisar generación solar y balance con CFE (Shelly)", TaskFrequency.DAILY),
    TaskTemplate("iluminacion", "Edificio", "Iluminación",
                 "Atención a inquilinos y cambio de luminarias", TaskFrequency.DAILY),
    # Weekly (Mondays)
    TaskTemplate("rampa", "Estacionamiento", "Rampa Hidráulica",
                 "Inspección visual, aceite y consumo en amperes", TaskFrequency.WEEKLY),
    # Monthly (1st)
    TaskTemplate("azotea", "Azotea", "Impermeabilización / Limpieza",
                 "Limpieza de azotea y revisión general", TaskFrequency.MONTHLY),
]


def is_due(template: TaskTemplate, day: date) -> bool:
    if template.frequency == TaskFrequency.WEEKLY:
        return day.weekday() == 0
    if template.frequency == TaskFrequency.MONTHLY:
        return day.day == 1
    return True


def build_tasks_for(day: date, assignee: Optional[str] = None) -> List[MaintenanceTask]:
    """Task rows due on the given day"""
    if assignee is None:
        assignee = get_settings().DEFAULT_ASSIGNEE
    iso_day = day.isoformat()
    return [
        MaintenanceTask(
            id=f"{t.slug}-{iso_day}",
            date=day,
            area=t.area,
            system=t.system,
            activity=t.activity,
            frequency=t.frequency.value,
            status=TaskStatus.PENDING.value,
            user=assignee,
        )
        for t in TASK_TEMPLATES
        if is_due(t, day)
    ]


async def seed_tasks_for(store: TaskStore, day: date, purge_past: bool = False) -> int:
    """
    Make sure the day's tasks exist. Returns how many were inserted
    (0 when the day already has tasks).
    """
    if purge_past:
        removed = await store.purge_before(day)
        logger.info(f"Removed {removed} tasks dated before {day}")

    existing = await store.count_by_date(day)
    if existing:
        logger.info(f"{existing} tasks already scheduled for {day}")
        return 0

    tasks = build_tasks_for(day)
    inserted = await store.add_many(tasks)
    for t in tasks:
        logger.debug(f"Seeded {t.id}: {t.system} - {t.area}")
    logger.info(f"Seeded {inserted} tasks for {day}")
    return inserted
