from __future__ import annotations

from typing import List

from core.models import Project


class ProjectQueryMixin:
    def list_projects(self) -> List[Project]:
        return self._project_repo.list_all()

    def get_project(self, project_id: str) -> Project | None:
        return self._project_repo.get(project_id)


__all__ = ["ProjectQueryMixin"]
