# infra/migrate.py
from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from infra.db.base import database_url

logger = logging.getLogger(__name__)

# infra/migrate.py -> infra -> project root
MIGRATION_DIR = Path(__file__).resolve().parents[1] / "migration"


def run_migrations(db_url: str | None = None) -> None:
    """Upgrade the database at db_url (PM_DB_URL / default file if omitted) to head."""
    alembic_ini = MIGRATION_DIR / "alembic.ini"
    if not alembic_ini.exists():
        raise RuntimeError(f"Alembic config missing: {alembic_ini}")

    url = db_url or database_url()
    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(MIGRATION_DIR))
    cfg.set_main_option("sqlalchemy.url", url)

    logger.info("Upgrading schema at %s", url)
    command.upgrade(cfg, "head")


__all__ = ["MIGRATION_DIR", "run_migrations"]
