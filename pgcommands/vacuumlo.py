from typing import List, Optional, Tuple

from pgcommands.command_builder import Command, build_command


class VacuumLoBuilder:
    """
    vacuumlo supprime les large objects orphelins d'une base.

    Exemple :
        VacuumLoBuilder().dry_run().host("localhost").port(5432).build()
    """

    def __init__(self):
        self._program_dir: Optional[str] = None
        self._limit: Optional[int] = None
        self._dry_run = False
        self._verbose = False
        self._version = False
        self._help = False
        self._host: Optional[str] = None
        self._port: Optional[int] = None
        self._username: Optional[str] = None
        self._no_password = False
        self._password = False
        self._pg_password: Optional[str] = None

    @classmethod
    def from_settings(cls, settings) -> "VacuumLoBuilder":
        """Pré-remplit le builder depuis un SettingsProvider."""
        builder = cls().host(settings.host).port(settings.port).username(settings.username)
        if settings.binary_dir:
            builder.program_dir(settings.binary_dir)
        # Mot de passe vide = pas de PGPASSWORD (libpq se rabat sur .pgpass)
        if settings.password:
            builder.pg_password(settings.password)
        return builder

    def program_dir(self, path: str) -> "VacuumLoBuilder":
        """Dossier contenant le binaire."""
        self._program_dir = str(path)
        return self

    def limit(self, limit: int) -> "VacuumLoBuilder":
        """Commit après chaque lot de LIMIT large objects supprimés."""
        self._limit = limit
        return self

    def dry_run(self) -> "VacuumLoBuilder":
        """N'efface rien, affiche seulement ce qui serait fait."""
        self._dry_run = True
        return self

    def verbose(self) -> "VacuumLoBuilder":
        self._verbose = True
        return self

    def version(self) -> "VacuumLoBuilder":
        self._version = True
        return self

    def help(self) -> "VacuumLoBuilder":
        self._help = True
        return self

    def host(self, host: str) -> "VacuumLoBuilder":
        """Hôte du serveur ou dossier du socket."""
        self._host = host
        return self

    def port(self, port: int) -> "VacuumLoBuilder":
        self._port = port
        return self

    def username(self, username: str) -> "VacuumLoBuilder":
        self._username = username
        return self

    def no_password(self) -> "VacuumLoBuilder":
        """Ne jamais demander de mot de passe."""
        self._no_password = True
        return self

    def password(self) -> "VacuumLoBuilder":
        """Force la demande de mot de passe."""
        self._password = True
        return self

    def pg_password(self, pg_password: str) -> "VacuumLoBuilder":
        """Mot de passe, transmis via PGPASSWORD et jamais en argument."""
        self._pg_password = pg_password
        return self

    # ------------------------------------------------------------
    # Contrat CommandBuilder
    # ------------------------------------------------------------

    def get_program(self) -> str:
        return "vacuumlo"

    def get_program_dir(self) -> Optional[str]:
        return self._program_dir

    def get_args(self) -> List[str]:
        args = []

        if self._limit is not None:
            args += ["--limit", str(self._limit)]
        if self._dry_run:
            args.append("--dry-run")
        if self._verbose:
            args.append("--verbose")
        if self._version:
            args.append("--version")
        if self._help:
            args.append("--help")
        if self._host is not None:
            args += ["--host", str(self._host)]
        if self._port is not None:
            args += ["--port", str(self._port)]
        if self._username is not None:
            args += ["--username", str(self._username)]
        if self._no_password:
            args.append("--no-password")
        if self._password:
            args.append("--password")

        return args

    def get_envs(self) -> List[Tuple[str, str]]:
        envs = []
        if self._pg_password is not None:
            envs.append(("PGPASSWORD", str(self._pg_password)))
        return envs

    def build(self) -> Command:
        return build_command(self)
