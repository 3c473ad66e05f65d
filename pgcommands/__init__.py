from pgcommands.command_builder import Command, CommandBuilder, build_command, to_command_string
from pgcommands.pg_restore import PgRestoreBuilder
from pgcommands.vacuumlo import VacuumLoBuilder

__all__ = [
    "Command",
    "CommandBuilder",
    "PgRestoreBuilder",
    "VacuumLoBuilder",
    "build_command",
    "to_command_string",
]
