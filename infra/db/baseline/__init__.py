from infra.db.baseline.mapper import baseline_from_orm, baseline_to_orm
from infra.db.baseline.repository import SqlAlchemyBaselineRepository

__all__ = [
    "baseline_from_orm",
    "baseline_to_orm",
    "SqlAlchemyBaselineRepository",
]
