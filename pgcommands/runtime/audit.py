import sqlite3
import os
import logging
from datetime import datetime

logger = logging.getLogger(__name__)

AUDIT_DB_PATH = os.environ.get("PGCOMMANDS_AUDIT_DB", "/opt/pgcommands/runtime/audit.db")

# Fallback pour le dev
if "PGCOMMANDS_AUDIT_DB" not in os.environ and not os.path.exists("/opt/pgcommands"):
    AUDIT_DB_PATH = os.path.join(os.path.dirname(__file__), "audit.db")


def init_db(db_path=None):
    """Crée la table d'audit si elle n'existe pas."""
    db_path = db_path or AUDIT_DB_PATH
    os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
    with sqlite3.connect(db_path) as conn:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS audit_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT,
                command TEXT,
                executed_command TEXT,
                exit_code INTEGER,
                stdout TEXT,
                stderr TEXT
            )
        """)


def log_execution(command, executed_command, exit_code, stdout, stderr, db_path=None):
    """
    Enregistre une exécution dans la base SQLite.
    `command` doit déjà être masqué (to_command_string(mask_env=True)) :
    le mot de passe ne doit jamais finir dans l'audit.
    """
    db_path = db_path or AUDIT_DB_PATH
    try:
        init_db(db_path)
        with sqlite3.connect(db_path) as conn:
            conn.execute(
                "INSERT INTO audit_logs (timestamp, command, executed_command, exit_code, stdout, stderr) VALUES (?, ?, ?, ?, ?, ?)",
                (datetime.now().isoformat(), command, executed_command, exit_code, stdout, stderr)
            )
    except (sqlite3.Error, OSError) as e:
        # L'audit ne doit jamais masquer le résultat de l'exécution
        logger.error(f"Failed to write audit log: {e}")


def get_last_logs(limit=10, db_path=None):
    """Récupère les dernières exécutions, la plus récente d'abord."""
    db_path = db_path or AUDIT_DB_PATH
    if not os.path.exists(db_path):
        return []
    with sqlite3.connect(db_path) as conn:
        conn.row_factory = sqlite3.Row
        cursor = conn.execute("SELECT * FROM audit_logs ORDER BY id DESC LIMIT ?", (limit,))
        return [dict(row) for row in cursor.fetchall()]
