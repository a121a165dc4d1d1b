"""Management CLI tests."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fastcfs import cli
from fastcfs.auth.password import verify_password
from fastcfs.models.user import User


@pytest.fixture
def cli_session(test_engine):
    """Point the CLI's session factory at the test database."""
    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    with patch("fastcfs.cli.async_session", factory):
        yield factory


@pytest.mark.unit
@pytest.mark.asyncio
class TestCreateAdmin:

    async def test_creates_admin_with_hashed_password(self, cli_session):
        created = await cli.create_admin("ops", "s3cret-pass")

        async with cli_session() as db:
            user = (
                await db.execute(select(User).where(User.username == "ops"))
            ).scalar_one()

        assert created is True
        assert user.role == "admin"
        assert user.hashed_password != "s3cret-pass"
        assert verify_password("s3cret-pass", user.hashed_password)

    async def test_existing_username_is_left_alone(self, cli_session):
        await cli.create_admin("ops", "first-pass")

        created = await cli.create_admin("ops", "second-pass")

        async with cli_session() as db:
            users = (await db.execute(select(User))).scalars().all()

        assert created is False
        assert len(users) == 1
        assert verify_password("first-pass", users[0].hashed_password)


@pytest.mark.unit
class TestMain:

    @pytest.fixture(autouse=True)
    def no_engine(self):
        engine = MagicMock()
        engine.dispose = AsyncMock()
        with patch("fastcfs.cli.engine", engine):
            yield engine

    @pytest.mark.parametrize(
        "argv", [[], ["unknown"], ["create-admin", "ops"]]
    )
    def test_usage_errors_exit_2(self, argv, capsys):
        assert cli.main(argv) == 2
        assert "Usage" in capsys.readouterr().out

    def test_create_admin_exit_codes(self, no_engine, capsys):
        with patch("fastcfs.cli.create_admin", AsyncMock(side_effect=[True, False])):
            first = cli.main(["create-admin", "ops", "pw"])
            second = cli.main(["create-admin", "ops", "pw"])

        assert (first, second) == (0, 1)
        assert "already exists" in capsys.readouterr().out
        assert no_engine.dispose.await_count == 2

    def test_create_tables(self, no_engine, capsys):
        with patch("fastcfs.cli.create_tables", AsyncMock()) as create_tables:
            assert cli.main(["create-tables"]) == 0

        create_tables.assert_awaited_once()
        assert "Tables created." in capsys.readouterr().out
