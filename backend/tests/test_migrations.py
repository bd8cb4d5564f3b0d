"""Alembic migrations build and drop the same schema the models describe."""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

import practice_tracker.models  # noqa: F401 - register practice tables on Base.metadata
from practice_tracker.db.base import Base

ALEMBIC_INI = Path(__file__).resolve().parents[1] / "alembic.ini"


@pytest.fixture
def alembic_config(tmp_path):
    """Alembic config pointed at a throwaway sqlite file."""
    url = f"sqlite:///{tmp_path / 'migrations.db'}"
    cfg = Config(str(ALEMBIC_INI))
    cfg.attributes["configure_logger"] = False
    cfg.set_main_option("sqlalchemy.url", url)
    return cfg, url


def test_upgrade_creates_practice_tables(alembic_config):
    cfg, url = alembic_config
    command.upgrade(cfg, "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        assert {"users", "practice_action", "practice_record"} <= tables
        assert set(Base.metadata.tables) <= tables
        for name, table in Base.metadata.tables.items():
            columns = {c["name"] for c in inspector.get_columns(name)}
            assert columns == {c.name for c in table.columns}
        indexes = {ix["name"] for ix in inspector.get_indexes("practice_record")}
        assert {"ix_practice_record_action_id", "ix_practice_record_finish_time"} <= indexes
    finally:
        engine.dispose()


def test_downgrade_drops_everything(alembic_config):
    cfg, url = alembic_config
    command.upgrade(cfg, "head")
    command.downgrade(cfg, "base")

    engine = create_engine(url)
    try:
        assert set(inspect(engine).get_table_names()) == {"alembic_version"}
    finally:
        engine.dispose()
