from taskboard.models.base import Base
from taskboard.models.comment import TaskComment
from taskboard.models.task import Task, task_assignees
from taskboard.models.user import User, UserRole

__all__ = ["Base", "User", "UserRole", "Task", "TaskComment", "task_assignees"]
