from typing import Any, Dict, List, Optional, Tuple

from pgcommands.command_builder import Command, build_command

# Ordre d'émission des options, identique à `pg_restore --help`.
# "value" -> deux tokens (--flag valeur), "flag" -> un token.
OPTIONS = [
    ("dbname", "--dbname", "value"),
    ("file", "--file", "value"),
    ("format", "--format", "value"),
    ("list", "--list", "flag"),
    ("verbose", "--verbose", "flag"),
    ("version", "--version", "flag"),
    ("help", "--help", "flag"),
    ("data_only", "--data-only", "flag"),
    ("clean", "--clean", "flag"),
    ("create", "--create", "flag"),
    ("exit_on_error", "--exit-on-error", "flag"),
    ("index", "--index", "value"),
    ("jobs", "--jobs", "value"),
    ("use_list", "--use-list", "value"),
    ("schema", "--schema", "value"),
    ("exclude_schema", "--exclude-schema", "value"),
    ("no_owner", "--no-owner", "flag"),
    ("function", "--function", "value"),
    ("schema_only", "--schema-only", "flag"),
    ("superuser", "--superuser", "value"),
    ("table", "--table", "value"),
    ("trigger", "--trigger", "value"),
    ("no_privileges", "--no-privileges", "flag"),
    ("single_transaction", "--single-transaction", "flag"),
    ("disable_triggers", "--disable-triggers", "flag"),
    ("enable_row_security", "--enable-row-security", "flag"),
    ("if_exists", "--if-exists", "flag"),
    ("no_comments", "--no-comments", "flag"),
    ("no_data_for_failed_tables", "--no-data-for-failed-tables", "flag"),
    ("no_publications", "--no-publications", "flag"),
    ("no_security_labels", "--no-security-labels", "flag"),
    ("no_subscriptions", "--no-subscriptions", "flag"),
    ("no_table_access_method", "--no-table-access-method", "flag"),
    ("no_tablespaces", "--no-tablespaces", "flag"),
    ("section", "--section", "value"),
    ("strict_names", "--strict-names", "flag"),
    ("use_set_session_authorization", "--use-set-session-authorization", "flag"),
    ("host", "--host", "value"),
    ("port", "--port", "value"),
    ("username", "--username", "value"),
    ("no_password", "--no-password", "flag"),
    ("password", "--password", "flag"),
    ("role", "--role", "value"),
]


class PgRestoreBuilder:
    """
    pg_restore restaure une base PostgreSQL depuis une archive créée par pg_dump.

    Aucune validation croisée : --data-only + --schema-only est transmis tel
    quel, c'est pg_restore qui tranche.
    """

    def __init__(self):
        self._program_dir: Optional[str] = None
        self._pg_password: Optional[str] = None
        self._options: Dict[str, Any] = {}

    @classmethod
    def from_settings(cls, settings) -> "PgRestoreBuilder":
        """Pré-remplit le builder depuis un SettingsProvider."""
        builder = cls().host(settings.host).port(settings.port).username(settings.username)
        if settings.binary_dir:
            builder.program_dir(settings.binary_dir)
        # Mot de passe vide = pas de PGPASSWORD (libpq se rabat sur .pgpass)
        if settings.password:
            builder.pg_password(settings.password)
        return builder

    def _set(self, name: str, value: Any) -> "PgRestoreBuilder":
        self._options[name] = value
        return self

    def program_dir(self, path: str) -> "PgRestoreBuilder":
        """Dossier contenant le binaire."""
        self._program_dir = str(path)
        return self

    # --- Options générales ---

    def dbname(self, name: str) -> "PgRestoreBuilder":
        """Base cible de la connexion."""
        return self._set("dbname", name)

    def file(self, filename: str) -> "PgRestoreBuilder":
        """Fichier de sortie (- pour stdout)."""
        return self._set("file", filename)

    def format(self, format: str) -> "PgRestoreBuilder":
        """Format de l'archive (détecté automatiquement en principe)."""
        return self._set("format", format)

    def list(self) -> "PgRestoreBuilder":
        """Affiche la table des matières de l'archive."""
        return self._set("list", True)

    def verbose(self) -> "PgRestoreBuilder":
        return self._set("verbose", True)

    def version(self) -> "PgRestoreBuilder":
        return self._set("version", True)

    def help(self) -> "PgRestoreBuilder":
        return self._set("help", True)

    # --- Contrôle de la restauration ---

    def data_only(self) -> "PgRestoreBuilder":
        """Données seulement, pas le schéma."""
        return self._set("data_only", True)

    def clean(self) -> "PgRestoreBuilder":
        """Supprime les objets avant de les recréer."""
        return self._set("clean", True)

    def create(self) -> "PgRestoreBuilder":
        """Crée la base cible."""
        return self._set("create", True)

    def exit_on_error(self) -> "PgRestoreBuilder":
        return self._set("exit_on_error", True)

    def index(self, name: str) -> "PgRestoreBuilder":
        return self._set("index", name)

    def jobs(self, num: str) -> "PgRestoreBuilder":
        """Nombre de jobs parallèles."""
        return self._set("jobs", num)

    def use_list(self, filename: str) -> "PgRestoreBuilder":
        """Restreint/ordonne la sortie selon la table des matières de ce fichier."""
        return self._set("use_list", filename)

    def schema(self, name: str) -> "PgRestoreBuilder":
        return self._set("schema", name)

    def exclude_schema(self, name: str) -> "PgRestoreBuilder":
        return self._set("exclude_schema", name)

    def no_owner(self) -> "PgRestoreBuilder":
        """Ne restaure pas la propriété des objets."""
        return self._set("no_owner", True)

    def function(self, name: str) -> "PgRestoreBuilder":
        return self._set("function", name)

    def schema_only(self) -> "PgRestoreBuilder":
        """Schéma seulement, pas les données."""
        return self._set("schema_only", True)

    def superuser(self, name: str) -> "PgRestoreBuilder":
        """Superutilisateur à utiliser pour désactiver les triggers."""
        return self._set("superuser", name)

    def table(self, name: str) -> "PgRestoreBuilder":
        return self._set("table", name)

    def trigger(self, name: str) -> "PgRestoreBuilder":
        return self._set("trigger", name)

    def no_privileges(self) -> "PgRestoreBuilder":
        """Ne restaure pas les droits (grant/revoke)."""
        return self._set("no_privileges", True)

    def single_transaction(self) -> "PgRestoreBuilder":
        return self._set("single_transaction", True)

    def disable_triggers(self) -> "PgRestoreBuilder":
        """Désactive les triggers pendant une restauration data-only."""
        return self._set("disable_triggers", True)

    def enable_row_security(self) -> "PgRestoreBuilder":
        return self._set("enable_row_security", True)

    def if_exists(self) -> "PgRestoreBuilder":
        """IF EXISTS lors du nettoyage des objets."""
        return self._set("if_exists", True)

    def no_comments(self) -> "PgRestoreBuilder":
        return self._set("no_comments", True)

    def no_data_for_failed_tables(self) -> "PgRestoreBuilder":
        """Ne restaure pas les données des tables qui n'ont pas pu être créées."""
        return self._set("no_data_for_failed_tables", True)

    def no_publications(self) -> "PgRestoreBuilder":
        return self._set("no_publications", True)

    def no_security_labels(self) -> "PgRestoreBuilder":
        return self._set("no_security_labels", True)

    def no_subscriptions(self) -> "PgRestoreBuilder":
        return self._set("no_subscriptions", True)

    def no_table_access_method(self) -> "PgRestoreBuilder":
        return self._set("no_table_access_method", True)

    def no_tablespaces(self) -> "PgRestoreBuilder":
        return self._set("no_tablespaces", True)

    def section(self, section: str) -> "PgRestoreBuilder":
        """Section à restaurer (pre-data, data, post-data)."""
        return self._set("section", section)

    def strict_names(self) -> "PgRestoreBuilder":
        return self._set("strict_names", True)

    def use_set_session_authorization(self) -> "PgRestoreBuilder":
        """SET SESSION AUTHORIZATION au lieu de ALTER OWNER."""
        return self._set("use_set_session_authorization", True)

    # --- Connexion ---

    def host(self, hostname: str) -> "PgRestoreBuilder":
        """Hôte du serveur ou dossier du socket."""
        return self._set("host", hostname)

    def port(self, port: int) -> "PgRestoreBuilder":
        return self._set("port", port)

    def username(self, name: str) -> "PgRestoreBuilder":
        return self._set("username", name)

    def no_password(self) -> "PgRestoreBuilder":
        """Ne jamais demander de mot de passe."""
        return self._set("no_password", True)

    def password(self) -> "PgRestoreBuilder":
        """Force la demande de mot de passe."""
        return self._set("password", True)

    def role(self, rolename: str) -> "PgRestoreBuilder":
        """SET ROLE avant la restauration."""
        return self._set("role", rolename)

    def pg_password(self, pg_password: str) -> "PgRestoreBuilder":
        """Mot de passe, transmis via PGPASSWORD et jamais en argument."""
        self._pg_password = pg_password
        return self

    # ------------------------------------------------------------
    # Contrat CommandBuilder
    # ------------------------------------------------------------

    def get_program(self) -> str:
        return "pg_restore"

    def get_program_dir(self) -> Optional[str]:
        return self._program_dir

    def get_args(self) -> List[str]:
        args = []
        for name, flag, kind in OPTIONS:
            value = self._options.get(name)
            if value is None:
                continue
            if kind == "flag":
                args.append(flag)
            else:
                args += [flag, str(value)]
        return args

    def get_envs(self) -> List[Tuple[str, str]]:
        envs = []
        if self._pg_password is not None:
            envs.append(("PGPASSWORD", str(self._pg_password)))
        return envs

    def build(self) -> Command:
        return build_command(self)
