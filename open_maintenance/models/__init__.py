from open_maintenance.models.task import MaintenanceTask, TaskStatus, TaskFrequency

__all__ = [
    "MaintenanceTask",
    "TaskStatus",
    "TaskFrequency",
]
