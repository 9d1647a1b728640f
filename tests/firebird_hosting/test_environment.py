import pytest

from firebird_hosting.extensions import add_firebird
from firebird_hosting.server import FbServerResource


async def _environment(app_builder):
    app = app_builder.build()
    servers = app.resources_of(FbServerResource)
    assert len(servers) == 1
    return await servers[0].get_environment_variable_values()


@pytest.mark.asyncio
async def test_with_user_adds_environment_variable(app_builder):
    add_firebird(app_builder, "firebird").with_user("Bob")

    assert await _environment(app_builder) == {"FIREBIRD_USER": "Bob"}


@pytest.mark.asyncio
async def test_with_password_adds_environment_variable(app_builder):
    add_firebird(app_builder, "firebird").with_password("secret")

    assert await _environment(app_builder) == {"FIREBIRD_PASSWORD": "secret"}


@pytest.mark.asyncio
async def test_with_root_password_adds_environment_variable(app_builder):
    add_firebird(app_builder, "firebird").with_root_password("very_secret")

    assert await _environment(app_builder) == {"FIREBIRD_ROOT_PASSWORD": "very_secret"}


@pytest.mark.asyncio
async def test_with_time_zone_adds_environment_variable(app_builder):
    add_firebird(app_builder, "firebird").with_time_zone("Europe/Berlin")

    assert await _environment(app_builder) == {"TZ": "Europe/Berlin"}


@pytest.mark.asyncio
async def test_use_legacy_auth_adds_environment_variable(app_builder):
    add_firebird(app_builder, "firebird").use_legacy_auth()

    assert await _environment(app_builder) == {"FIREBIRD_USE_LEGACY_AUTH": "true"}


def test_helpers_return_same_builder(app_builder):
    firebird = add_firebird(app_builder, "firebird")

    assert firebird.with_user("Bob") is firebird
    assert firebird.with_password("secret") is firebird
    assert firebird.with_root_password("very_secret") is firebird
    assert firebird.with_time_zone("UTC") is firebird
    assert firebird.use_legacy_auth() is firebird


@pytest.mark.asyncio
async def test_add_database_sets_firebird_database(app_builder):
    add_firebird(app_builder, "firebird").add_database("db", "main.fdb")

    assert await _environment(app_builder) == {"FIREBIRD_DATABASE": "main.fdb"}


@pytest.mark.asyncio
async def test_last_database_wins_and_warns(mock_logger):
    from firebird_hosting.hosting.builder import DistributedApplicationBuilder

    builder = DistributedApplicationBuilder(configuration={}, logger=mock_logger)
    firebird = add_firebird(builder, "firebird")
    firebird.add_database("db1", "first.fdb")
    mock_logger.warning.assert_not_called()

    firebird.add_database("db2", "second.fdb")

    assert (await _environment(builder))["FIREBIRD_DATABASE"] == "second.fdb"
    mock_logger.warning.assert_called_once()
    assert mock_logger.warning.call_args.args[0] == "firebird_database_env_overridden"
