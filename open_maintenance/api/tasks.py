"""
Maintenance task API endpoints - today's checklist and task completion
"""
from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Annotated, List, Optional
from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator

from open_maintenance.config import get_settings
from open_maintenance.database import get_db
from open_maintenance.services.task_store import TaskStore
from open_maintenance.utils.helpers import site_today
from open_maintenance.utils.validators import (
    TASK_ID_PATTERN, PHOTO_MAX_LENGTH, NOTE_MAX_LENGTH, validate_photo_reference,
)

router = APIRouter()


# --- Pydantic Schemas ---

class TaskResponse(BaseModel):
    id: str
    date: date
    area: str
    system: str
    activity: str
    frequency: str
    status: str
    photo: Optional[str]
    note: Optional[str]
    user: str
    completed_at: Optional[datetime]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class TaskCompletion(BaseModel):
    photo: Optional[str] = Field(None, max_length=PHOTO_MAX_LENGTH)
    note: Optional[str] = Field(None, max_length=NOTE_MAX_LENGTH)

    @field_validator("photo")
    @classmethod
    def check_photo(cls, v):
        return validate_photo_reference(v)


class CompletionResult(BaseModel):
    success: bool = True
    updated: int


# --- Dependencies ---

async def get_task_store(db: AsyncSession = Depends(get_db)) -> TaskStore:
    return TaskStore(db)


TaskId = Annotated[str, Path(pattern=TASK_ID_PATTERN, description="Task identifier, e.g. agua-2026-10-18")]


# --- Endpoints ---

@router.get("/today", response_model=List[TaskResponse])
async def list_today_tasks(store: TaskStore = Depends(get_task_store)):
    """Tasks scheduled for the building's current date"""
    return await store.list_by_date(site_today())


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    day: Optional[date] = Query(None, alias="date"),
    store: TaskStore = Depends(get_task_store),
):
    """Tasks for an explicit date (defaults to today)"""
    return await store.list_by_date(day or site_today())


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: TaskId,
    store: TaskStore = Depends(get_task_store),
):
    task = await store.get(task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post("/{task_id}/complete", response_model=CompletionResult)
async def complete_task(
    task_id: TaskId,
    data: Optional[TaskCompletion] = None,
    store: TaskStore = Depends(get_task_store),
):
    """Mark a task done. Unknown ids report updated=0."""
    data = data or TaskCompletion()
    updated = await store.complete(
        task_id,
        photo=data.photo,
        note=data.note,
        allow_overwrite=not get_settings().REJECT_RECOMPLETION,
    )
    return CompletionResult(success=True, updated=updated)
