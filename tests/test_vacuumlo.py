import os
import pytest

from pgcommands.vacuumlo import VacuumLoBuilder


def test_builder_new():
    command = VacuumLoBuilder().program_dir(".").build()
    assert os.path.join(".", "vacuumlo") == command.to_command_string().replace('"', "")
    assert command.args == ()
    assert command.envs == ()


def test_builder_default_has_no_flags():
    command = VacuumLoBuilder().build()
    assert command.to_command_string() == '"vacuumlo"'


def test_builder_from_settings(settings):
    command = VacuumLoBuilder.from_settings(settings).build()
    assert command.to_command_string() == \
        'PGPASSWORD="password" "./vacuumlo" "--host" "localhost" "--port" "5432" "--username" "postgres"'


def test_builder_from_settings_without_password_or_dir(settings):
    settings.binary_dir = None
    settings.password = ""
    command = VacuumLoBuilder.from_settings(settings).build()
    assert command.program == "vacuumlo"
    assert command.envs == ()


def test_builder():
    command = (
        VacuumLoBuilder()
        .limit(100)
        .dry_run()
        .verbose()
        .version()
        .help()
        .host("localhost")
        .port(5432)
        .username("postgres")
        .no_password()
        .password()
        .pg_password("password")
        .build()
    )

    assert command.to_command_string() == (
        'PGPASSWORD="password" "vacuumlo" "--limit" "100" "--dry-run" "--verbose" "--version" '
        '"--help" "--host" "localhost" "--port" "5432" "--username" "postgres" "--no-password" "--password"'
    )


def test_call_order_does_not_change_emission_order():
    a = VacuumLoBuilder().verbose().limit(10).host("h").dry_run().build()
    b = VacuumLoBuilder().host("h").dry_run().limit(10).verbose().build()
    assert a == b
    assert list(a.args) == ["--limit", "10", "--dry-run", "--verbose", "--host", "h"]


def test_limit_zero_is_emitted():
    assert VacuumLoBuilder().limit(0).build().args == ("--limit", "0")


@pytest.mark.parametrize("method, token", [
    ("dry_run", "--dry-run"),
    ("verbose", "--verbose"),
    ("version", "--version"),
    ("help", "--help"),
    ("no_password", "--no-password"),
    ("password", "--password"),
])
def test_presence_flag_emitted_once(method, token):
    builder = VacuumLoBuilder()
    getattr(builder, method)()
    getattr(builder, method)()
    assert builder.build().args == (token,)


def test_password_never_in_arguments():
    command = VacuumLoBuilder().pg_password("s3cr3t").password().build()
    assert "s3cr3t" not in command.args
    assert command.args == ("--password",)
    assert command.envs == (("PGPASSWORD", "s3cr3t"),)


def test_conflicting_password_flags_are_passed_through():
    command = VacuumLoBuilder().no_password().password().build()
    assert command.args == ("--no-password", "--password")
