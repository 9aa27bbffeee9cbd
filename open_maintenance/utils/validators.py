"""
Input validation utilities
"""
import re
from typing import Optional

TASK_ID_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9_.:-]{0,127}$"
PHOTO_MAX_LENGTH = 2048
NOTE_MAX_LENGTH = 2000

_task_id_re = re.compile(TASK_ID_PATTERN)


def validate_task_id(task_id: str) -> str:
    """Validate task identifier format"""
    if not _task_id_re.fullmatch(task_id or ""):
        raise ValueError("Invalid task id")
    return task_id


def validate_photo_reference(photo: Optional[str]) -> Optional[str]:
    """Photo must be an http(s) URL or a plain storage key, never a data blob"""
    if photo is None or photo == "":
        return photo
    photo = photo.strip()
    if photo.startswith("data:"):
        raise ValueError("Photo must be a reference, not inline data")
    if any(ch.isspace() for ch in photo):
        raise ValueError("Photo reference cannot contain whitespace")
    return photo
