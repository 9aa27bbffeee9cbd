"""
Task store - persistence and query contract for maintenance tasks.

The store wraps an explicitly provided AsyncSession so the API layer and the
startup seeder can share one implementation while tests inject their own
in-memory session. Engine errors are re-raised as TaskStoreError so callers can
tell a storage failure apart from "no matching row".
"""
import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import select, update, delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from open_maintenance.models.task import MaintenanceTask, TaskStatus
from open_maintenance.utils.helpers import utc_now
from open_maintenance.utils.validators import validate_task_id

logger = logging.getLogger(__name__)


class TaskStoreError(Exception):
    """Underlying storage engine failed"""


class TaskAlreadyCompletedError(Exception):
    """Completion rejected because the task is already done"""

    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id} is already completed")
        self.task_id = task_id


class TaskStore:

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _fail(self, action: str, exc: SQLAlchemyError) -> None:
        logger.error(f"Storage error while {action}: {exc}")
        try:
            await self.session.rollback()
        except SQLAlchemyError as rollback_exc:
            logger.warning(f"Rollback after storage error failed: {rollback_exc}")
        raise TaskStoreError(str(exc)) from exc

    async def list_by_date(self, day: date) -> List[MaintenanceTask]:
        """All tasks scheduled for the given day, empty list if none"""
        try:
            result = await self.session.execute(
                select(MaintenanceTask)
                .where(MaintenanceTask.date == day)
                .order_by(MaintenanceTask.created_at, MaintenanceTask.id)
                .execution_options(populate_existing=True)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            await self._fail(f"listing tasks for {day}", e)

    async def get(self, task_id: str) -> Optional[MaintenanceTask]:
        try:
            return await self.session.get(MaintenanceTask, task_id, populate_existing=True)
        except SQLAlchemyError as e:
            await self._fail(f"loading task {task_id}", e)

    async def count_by_date(self, day: date) -> int:
        try:
            result = await self.session.execute(
                select(func.count()).select_from(MaintenanceTask).where(MaintenanceTask.date == day)
            )
            return result.scalar() or 0
        except SQLAlchemyError as e:
            await self._fail(f"counting tasks for {day}", e)

    async def add_many(self, tasks: Iterable[MaintenanceTask]) -> int:
        """Insert new task rows. Duplicate ids surface as TaskStoreError."""
        tasks = list(tasks)
        for t in tasks:
            validate_task_id(t.id)
        try:
            self.session.add_all(tasks)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail("inserting tasks", e)
        return len(tasks)

    async def complete(
        self,
        task_id: str,
        photo: Optional[str] = None,
        note: Optional[str] = None,
        allow_overwrite: bool = True,
    ) -> int:
        """
        Mark a task done and attach photo/note.

        Returns the number of rows updated (0 when no task has this id).
        A done task is overwritten (last write wins) unless allow_overwrite is
        False, in which case TaskAlreadyCompletedError is raised.
        """
        stmt = (
            update(MaintenanceTask)
            .where(MaintenanceTask.id == task_id)
            .values(
                status=TaskStatus.DONE.value,
                photo=photo,
                note=note,
                completed_at=utc_now(),
            )
        )
        if not allow_overwrite:
            stmt = stmt.where(MaintenanceTask.status != TaskStatus.DONE.value)

        try:
            result = await self.session.execute(stmt)
            updated = result.rowcount or 0
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail(f"completing task {task_id}", e)

        if updated == 0 and not allow_overwrite:
            existing = await self.get(task_id)
            if existing is not None:
                raise TaskAlreadyCompletedError(task_id)

        if updated:
            logger.info(f"Task {task_id} marked done")
        else:
            logger.info(f"Completion for unknown task {task_id} matched no rows")
        return updated

    async def purge_before(self, day: date) -> int:
        """Delete tasks dated before the given day"""
        try:
            result = await self.session.execute(
                delete(MaintenanceTask).where(MaintenanceTask.date < day)
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail(f"purging tasks before {day}", e)
        return result.rowcount or 0
