"""
Maintenance task model - one scheduled action per building system per day
"""
from sqlalchemy import Column, String, Text, Date, DateTime
from enum import Enum
from open_maintenance.database import Base
from open_maintenance.utils.helpers import utc_now


class TaskStatus(str, Enum):
    PENDING = "pending"
    DONE = "done"


class TaskFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class MaintenanceTask(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True, index=True)  # "agua-2026-10-18"
    date = Column(Date, nullable=False, index=True)
    area = Column(String, nullable=False)
    system = Column(String, nullable=False)
    activity = Column(Text, nullable=False)
    frequency = Column(String, nullable=False, default=TaskFrequency.DAILY.value)  # label only
    status = Column(String, nullable=False, default=TaskStatus.PENDING.value)
    photo = Column(String, nullable=True)
    note = Column(Text, nullable=True)
    user = Column(String, nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
