from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from core.interfaces import MilestoneRepository, ProjectRepository, TaskRepository
from core.models import Milestone, MilestoneStatus, MilestoneType
from core.services.common.values import coerce_date, coerce_enum

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = (
    "name",
    "description",
    "milestone_type",
    "target_date",
    "forecast_date",
    "actual_date",
    "status",
    "is_critical",
    "related_task_id",
)


class MilestoneService:
    """Key dates of a project. Milestones never feed the CPM arithmetic."""

    def __init__(
        self,
        session: Session,
        milestone_repo: MilestoneRepository,
        task_repo: TaskRepository,
        project_repo: ProjectRepository | None = None,
    ):
        self._session: Session = session
        self._milestone_repo: MilestoneRepository = milestone_repo
        self._task_repo: TaskRepository = task_repo
        self._project_repo: ProjectRepository | None = project_repo

    def _validate_name(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Milestone name cannot be empty.", code="MILESTONE_NAME_EMPTY")

    def _validate_related_task(self, project_id: str, related_task_id: Optional[str]) -> None:
        if related_task_id is None:
            return
        task = self._task_repo.get(related_task_id)
        if not task or task.project_id != project_id:
            raise ValidationError(
                "Related task must exist in the same project.",
                code="MILESTONE_TASK_INVALID",
            )

    def create_milestone(
        self,
        project_id: str,
        name: str,
        target_date: date,
        description: str = "",
        milestone_type: MilestoneType | str = MilestoneType.PROJECT,
        forecast_date: Optional[date] = None,
        status: MilestoneStatus | str = MilestoneStatus.PENDING,
        is_critical: bool = False,
        related_task_id: Optional[str] = None,
    ) -> Milestone:
        if self._project_repo is not None and not self._project_repo.get(project_id):
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        self._validate_name(name)
        target = coerce_date(target_date, "target_date")
        if target is None:
            raise ValidationError("Milestone target_date is required.", code="MILESTONE_DATE_MISSING")
        self._validate_related_task(project_id, related_task_id)

        milestone = Milestone.create(
            project_id=project_id,
            name=name.strip(),
            target_date=target,
            description=description,
            milestone_type=coerce_enum(MilestoneType, milestone_type, "milestone_type"),
            forecast_date=coerce_date(forecast_date, "forecast_date"),
            status=coerce_enum(MilestoneStatus, status, "status"),
            is_critical=bool(is_critical),
            related_task_id=related_task_id,
        )
        try:
            self._milestone_repo.add(milestone)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error("Error creating milestone: %s", exc)
            raise
        logger.info("Created milestone %s - %s for project %s", milestone.id, milestone.name, project_id)
        return milestone

    def update_milestone(self, milestone_id: str, **changes: Any) -> Milestone:
        milestone = self.get_milestone(milestone_id)
        for field_name in changes:
            if field_name not in _EDITABLE_FIELDS:
                raise ValidationError(
                    f"Milestone field '{field_name}' cannot be edited.",
                    code="MILESTONE_FIELD_READ_ONLY",
                )

        values = dict(changes)
        if "name" in values:
            self._validate_name(values["name"])
            values["name"] = values["name"].strip()
        if "milestone_type" in values:
            values["milestone_type"] = coerce_enum(MilestoneType, values["milestone_type"], "milestone_type")
        if "status" in values:
            values["status"] = coerce_enum(MilestoneStatus, values["status"], "status")
        for field_name in ("target_date", "forecast_date", "actual_date"):
            if field_name in values:
                values[field_name] = coerce_date(values[field_name], field_name)
        if "target_date" in values and values["target_date"] is None:
            raise ValidationError("Milestone target_date is required.", code="MILESTONE_DATE_MISSING")
        if "related_task_id" in values:
            self._validate_related_task(milestone.project_id, values["related_task_id"])
        if "is_critical" in values:
            values["is_critical"] = bool(values["is_critical"])

        for field_name, value in values.items():
            setattr(milestone, field_name, value)

        try:
            self._milestone_repo.update(milestone)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        return milestone

    def delete_milestone(self, milestone_id: str) -> None:
        self.get_milestone(milestone_id)
        try:
            self._milestone_repo.delete(milestone_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    def get_milestone(self, milestone_id: str) -> Milestone:
        milestone = self._milestone_repo.get(milestone_id)
        if not milestone:
            raise NotFoundError("Milestone not found.", code="MILESTONE_NOT_FOUND")
        return milestone

    def list_milestones(
        self,
        project_id: str,
        status: MilestoneStatus | str | None = None,
        milestone_type: MilestoneType | str | None = None,
    ) -> List[Milestone]:
        rows = self._milestone_repo.list_by_project(project_id)
        if status is not None:
            wanted_status = coerce_enum(MilestoneStatus, status, "status")
            rows = [m for m in rows if m.status == wanted_status]
        if milestone_type is not None:
            wanted_type = coerce_enum(MilestoneType, milestone_type, "milestone_type")
            rows = [m for m in rows if m.milestone_type == wanted_type]
        return rows


__all__ = ["MilestoneService"]
