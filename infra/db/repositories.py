# infra/db/repositories.py
from infra.db.baseline.repository import SqlAlchemyBaselineRepository
from infra.db.milestone.repository import SqlAlchemyMilestoneRepository
from infra.db.project.repository import SqlAlchemyProjectRepository
from infra.db.task.repository import SqlAlchemyDependencyRepository, SqlAlchemyTaskRepository

__all__ = [
    "SqlAlchemyProjectRepository",
    "SqlAlchemyTaskRepository",
    "SqlAlchemyDependencyRepository",
    "SqlAlchemyMilestoneRepository",
    "SqlAlchemyBaselineRepository",
]
