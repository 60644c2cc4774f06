from __future__ import annotations

import os
from datetime import date, timedelta
from enum import Enum
from typing import Optional

from core.exceptions import ValidationError
from core.models import DependencyType, TaskDependency


class DependencyMode(str, Enum):
    """
    How lag is applied across the four dependency types.

    UNIFORM treats every link as successor start >= predecessor finish + lag,
    whatever its type. TYPED relates the start/finish ends each type names.
    """

    UNIFORM = "uniform"
    TYPED = "typed"


def resolve_dependency_mode(value: DependencyMode | str | None = None) -> DependencyMode:
    if isinstance(value, DependencyMode):
        return value
    raw = value if value is not None else os.getenv("PM_CPM_DEPENDENCY_MODE", DependencyMode.UNIFORM.value)
    try:
        return DependencyMode(str(raw).strip().lower())
    except ValueError:
        raise ValidationError(
            f"Unknown dependency mode: {raw!r} (expected 'uniform' or 'typed').",
            code="SCHEDULE_MODE_INVALID",
        ) from None


def _shift(day: date, days: int) -> date:
    return day + timedelta(days=days)


def forward_start_candidate(
    dep: TaskDependency,
    pred_es: Optional[date],
    pred_ef: Optional[date],
    duration: int,
    mode: DependencyMode,
) -> Optional[date]:
    """Earliest start the successor may take under one incoming link."""
    lag = int(dep.lag_days or 0)
    if mode == DependencyMode.UNIFORM or dep.dependency_type == DependencyType.FINISH_TO_START:
        return _shift(pred_ef, lag) if pred_ef else None
    if dep.dependency_type == DependencyType.START_TO_START:
        return _shift(pred_es, lag) if pred_es else None
    if dep.dependency_type == DependencyType.FINISH_TO_FINISH:
        # EF_s >= EF_p + lag
        return _shift(pred_ef, lag - duration) if pred_ef else None
    # SF: EF_s >= ES_p + lag
    return _shift(pred_es, lag - duration) if pred_es else None


def backward_finish_candidate(
    dep: TaskDependency,
    succ_ls: Optional[date],
    succ_lf: Optional[date],
    duration: int,
    mode: DependencyMode,
) -> Optional[date]:
    """Latest finish the predecessor may take under one outgoing link."""
    lag = int(dep.lag_days or 0)
    if mode == DependencyMode.UNIFORM or dep.dependency_type == DependencyType.FINISH_TO_START:
        return _shift(succ_ls, -lag) if succ_ls else None
    if dep.dependency_type == DependencyType.START_TO_START:
        # LS_p <= LS_s - lag
        return _shift(succ_ls, duration - lag) if succ_ls else None
    if dep.dependency_type == DependencyType.FINISH_TO_FINISH:
        return _shift(succ_lf, -lag) if succ_lf else None
    # SF: LS_p <= LF_s - lag
    return _shift(succ_lf, duration - lag) if succ_lf else None


__all__ = [
    "DependencyMode",
    "resolve_dependency_mode",
    "forward_start_candidate",
    "backward_finish_candidate",
]
