""" Track changes in tasks, computed schedules and baselines for a project """
from core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        self.tasks_changed: Signal[str] = Signal("tasks_changed")                  # project_id
        self.schedule_recalculated: Signal[str] = Signal("schedule_recalculated")  # project_id
        self.baseline_changed: Signal[str] = Signal("baseline_changed")            # project_id


# SINGLE global instance
domain_events = DomainEvents()
