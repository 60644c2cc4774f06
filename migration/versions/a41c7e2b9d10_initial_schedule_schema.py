"""initial schedule schema

Revision ID: a41c7e2b9d10
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "a41c7e2b9d10"
down_revision = None
branch_labels = None
depends_on = None


def _enum_col(name: str, nullable: bool = False) -> sa.Column:
    # enum members are stored by name in a plain VARCHAR
    return sa.Column(name, sa.String(length=32), nullable=nullable)


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
    )

    op.create_table(
        "schedule_tasks",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "project_id",
            sa.String(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "parent_task_id",
            sa.String(),
            sa.ForeignKey("schedule_tasks.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("task_code", sa.String(length=50), nullable=True),
        sa.Column("name", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("planned_start_date", sa.Date(), nullable=True),
        sa.Column("planned_end_date", sa.Date(), nullable=True),
        sa.Column("duration_days", sa.Integer(), nullable=False, server_default="0"),
        _enum_col("status"),
        _enum_col("priority"),
        _enum_col("task_type"),
        _enum_col("constraint_type", nullable=True),
        sa.Column("constraint_date", sa.Date(), nullable=True),
        sa.Column("actual_start_date", sa.Date(), nullable=True),
        sa.Column("actual_end_date", sa.Date(), nullable=True),
        sa.Column("percent_complete", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("budgeted_cost", sa.Float(), nullable=True),
        sa.Column("actual_cost", sa.Float(), nullable=True),
        sa.Column("assigned_to", sa.String(), nullable=True),
        sa.Column("early_start_date", sa.Date(), nullable=True),
        sa.Column("early_finish_date", sa.Date(), nullable=True),
        sa.Column("late_start_date", sa.Date(), nullable=True),
        sa.Column("late_finish_date", sa.Date(), nullable=True),
        sa.Column("total_float_days", sa.Integer(), nullable=True),
        sa.Column("is_critical", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.CheckConstraint("duration_days >= 0", name="ck_task_duration_non_negative"),
        sa.CheckConstraint(
            "percent_complete >= 0 AND percent_complete <= 100",
            name="ck_task_percent_complete_range",
        ),
    )
    op.create_index("idx_schedule_tasks_project", "schedule_tasks", ["project_id"])
    op.create_index("idx_schedule_tasks_parent", "schedule_tasks", ["parent_task_id"])
    op.create_index(
        "idx_schedule_tasks_dates", "schedule_tasks", ["planned_start_date", "planned_end_date"]
    )
    op.create_index("idx_schedule_tasks_status", "schedule_tasks", ["status"])

    op.create_table(
        "task_dependencies",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "predecessor_task_id",
            sa.String(),
            sa.ForeignKey("schedule_tasks.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "successor_task_id",
            sa.String(),
            sa.ForeignKey("schedule_tasks.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _enum_col("dependency_type"),
        sa.Column("lag_days", sa.Integer(), nullable=False, server_default="0"),
        sa.CheckConstraint("predecessor_task_id != successor_task_id", name="ck_no_self_dependency"),
        sa.UniqueConstraint("predecessor_task_id", "successor_task_id", name="ux_dependency_pair"),
    )
    op.create_index("idx_dep_predecessor", "task_dependencies", ["predecessor_task_id"])
    op.create_index("idx_dep_successor", "task_dependencies", ["successor_task_id"])

    op.create_table(
        "schedule_milestones",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "project_id",
            sa.String(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _enum_col("milestone_type"),
        sa.Column("target_date", sa.Date(), nullable=False),
        sa.Column("forecast_date", sa.Date(), nullable=True),
        sa.Column("actual_date", sa.Date(), nullable=True),
        _enum_col("status"),
        sa.Column("is_critical", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "related_task_id",
            sa.String(),
            sa.ForeignKey("schedule_tasks.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    op.create_index("idx_milestones_project", "schedule_milestones", ["project_id"])
    op.create_index("idx_milestones_date", "schedule_milestones", ["target_date"])

    op.create_table(
        "schedule_baselines",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "project_id",
            sa.String(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _enum_col("baseline_type"),
        sa.Column("baseline_date", sa.Date(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("finish_date", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("task_snapshot", sa.JSON(), nullable=False),
    )
    op.create_index("idx_baselines_project", "schedule_baselines", ["project_id"])
    op.create_index("idx_baselines_active", "schedule_baselines", ["project_id", "is_active"])


def downgrade() -> None:
    op.drop_index("idx_baselines_active", table_name="schedule_baselines")
    op.drop_index("idx_baselines_project", table_name="schedule_baselines")
    op.drop_table("schedule_baselines")

    op.drop_index("idx_milestones_date", table_name="schedule_milestones")
    op.drop_index("idx_milestones_project", table_name="schedule_milestones")
    op.drop_table("schedule_milestones")

    op.drop_index("idx_dep_successor", table_name="task_dependencies")
    op.drop_index("idx_dep_predecessor", table_name="task_dependencies")
    op.drop_table("task_dependencies")

    op.drop_index("idx_schedule_tasks_status", table_name="schedule_tasks")
    op.drop_index("idx_schedule_tasks_dates", table_name="schedule_tasks")
    op.drop_index("idx_schedule_tasks_parent", table_name="schedule_tasks")
    op.drop_index("idx_schedule_tasks_project", table_name="schedule_tasks")
    op.drop_table("schedule_tasks")

    op.drop_table("projects")
