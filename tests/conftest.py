import pytest


class FakeSettings:
    """Settings figés utilisés par les tests des builders."""
    binary_dir = "."
    host = "localhost"
    port = 5432
    username = "postgres"
    password = "password"


@pytest.fixture
def settings():
    return FakeSettings()


@pytest.fixture
def audit_db(tmp_path, monkeypatch):
    """Redirige l'audit SQLite vers un fichier temporaire."""
    db_path = str(tmp_path / "audit.db")
    monkeypatch.setattr("pgcommands.runtime.audit.AUDIT_DB_PATH", db_path)
    return db_path
