from core.services.task.query import TaskDetail
from core.services.task.service import TaskService

__all__ = ["TaskService", "TaskDetail"]
