from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.interfaces import ProjectRepository
from core.models import Project
from core.services.project.validation import ProjectValidationMixin

logger = logging.getLogger(__name__)


class ProjectLifecycleMixin(ProjectValidationMixin):
    _session: Session
    _project_repo: ProjectRepository

    def create_project(
        self,
        name: str,
        description: str = "",
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Project:
        self._validate_project_name(name)
        self._validate_project_dates(start_date, end_date)
        project = Project.create(
            name=name.strip(),
            description=description.strip(),
            start_date=start_date,
            end_date=end_date,
        )

        try:
            self._project_repo.add(project)
            self._session.commit()
            logger.info("Created project %s - %s", project.id, project.name)
            return project
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating project: %s", e)
            raise

    def delete_project(self, project_id: str) -> None:
        """Remove the project; tasks, links, milestones and baselines go with it."""
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")

        try:
            self._project_repo.delete(project_id)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error deleting project %s: %s", project_id, e)
            raise
        logger.info("Deleted project %s - %s", project.id, project.name)


__all__ = ["ProjectLifecycleMixin"]
