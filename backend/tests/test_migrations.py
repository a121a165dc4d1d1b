"""Alembic migration tests (synchronous SQLite file per test)."""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from fastcfs.config import settings
from fastcfs.database import Base

ALEMBIC_DIR = Path(__file__).resolve().parents[1] / "alembic"


@pytest.fixture
def alembic_config(tmp_path, monkeypatch) -> Config:
    url = f"sqlite:///{tmp_path / 'migrations.db'}"
    # env.py reads the URL from settings
    monkeypatch.setattr(settings, "database_url_sync", url)
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    config.attributes["url"] = url
    return config


def _columns(url: str) -> dict[str, set[str]]:
    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        return {
            table: {c["name"] for c in inspector.get_columns(table)}
            for table in inspector.get_table_names()
        }
    finally:
        engine.dispose()


@pytest.mark.unit
class TestInitialMigration:

    def test_upgrade_matches_models(self, alembic_config: Config):
        command.upgrade(alembic_config, "head")

        columns = _columns(alembic_config.attributes["url"])
        columns.pop("alembic_version")

        assert columns == {
            name: {c.name for c in table.columns}
            for name, table in Base.metadata.tables.items()
        }

    def test_downgrade_drops_everything(self, alembic_config: Config):
        command.upgrade(alembic_config, "head")
        command.downgrade(alembic_config, "base")

        assert set(_columns(alembic_config.attributes["url"])) == {"alembic_version"}
