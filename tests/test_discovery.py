import os
import pytest
from unittest.mock import patch, MagicMock

from pgcommands.runtime.discovery import discover_binaries, find_bin_dirs, find_binary_dir, get_version_from_path


# 1. Tests unitaires sur la Regex de versioning
@pytest.mark.parametrize("path, expected", [
    ("/usr/lib/postgresql/16/bin", "16"),
    ("/usr/pgsql-13/bin", "13"),
    ("/opt/postgresql-9.6/bin", "9.6"),
    ("/usr/pgsql-17.rc1/bin", "17"),
    ("/opt/postgresql-17.beta/bin", "17"),
    ("/usr/bin", None),
    ("/custom/path/no-version/bin", None),
])
def test_get_version_from_path(path, expected):
    assert get_version_from_path(path) == expected


def _mock_scandir(names):
    def mock_scandir(path):
        entries = []
        for name in names:
            entry = MagicMock()
            entry.name = name
            entry.path = os.path.join(path, name)
            entry.is_file.return_value = True
            entries.append(entry)

        # os.scandir s'utilise comme context manager
        mock_cm = MagicMock()
        mock_cm.__enter__.return_value = entries
        return mock_cm
    return mock_scandir


MOCK_DIRS = [
    "/usr/lib/postgresql/9.6/bin",
    "/usr/lib/postgresql/12/bin",
    "/usr/lib/postgresql/16/bin",
]


def test_find_bin_dirs_sorts_by_numeric_version():
    with patch("glob.glob", return_value=MOCK_DIRS), \
         patch("os.path.isdir", return_value=True):
        dirs = find_bin_dirs()

    # 16 > 12 > 9.6 : comparaison numérique, pas alphabétique
    assert dirs == [
        "/usr/lib/postgresql/16/bin",
        "/usr/lib/postgresql/12/bin",
        "/usr/lib/postgresql/9.6/bin",
    ]


# 2. Simulation du système de fichiers
def test_discover_binaries_mocked():
    """Vérifie la logique de tri et d'aliasing avec des dossiers fictifs."""
    with patch("glob.glob", return_value=MOCK_DIRS), \
         patch("os.path.isdir", return_value=True), \
         patch("os.access", return_value=True), \
         patch("os.scandir", side_effect=_mock_scandir(["pg_restore", "vacuumlo"])):

        registry = discover_binaries()

    # le nom nu pointe vers la version 16
    assert registry["binaries"]["pg_restore"] == "/usr/lib/postgresql/16/bin/pg_restore"
    assert registry["binaries"]["vacuumlo"] == "/usr/lib/postgresql/16/bin/vacuumlo"

    # alias versionnés
    assert registry["binaries"]["pg_restore-12"] == "/usr/lib/postgresql/12/bin/pg_restore"
    assert registry["binaries"]["vacuumlo-9.6"] == "/usr/lib/postgresql/9.6/bin/vacuumlo"


def test_find_binary_dir():
    with patch("glob.glob", return_value=MOCK_DIRS), \
         patch("os.path.isdir", return_value=True), \
         patch("os.access", return_value=True), \
         patch("os.scandir", side_effect=_mock_scandir(["pg_restore"])):

        assert find_binary_dir("pg_restore") == "/usr/lib/postgresql/16/bin"
        assert find_binary_dir("pg_restore", version="12") == "/usr/lib/postgresql/12/bin"
        assert find_binary_dir("vacuumlo") is None


def test_non_executable_files_are_ignored():
    with patch("glob.glob", return_value=["/usr/lib/postgresql/16/bin"]), \
         patch("os.path.isdir", return_value=True), \
         patch("os.access", return_value=False), \
         patch("os.scandir", side_effect=_mock_scandir(["pg_restore"])):

        assert discover_binaries()["binaries"] == {}


# 3. Le scan ne doit pas planter sur un dossier interdit
def test_discovery_permission_resilience():
    with patch("glob.glob", return_value=MOCK_DIRS), \
         patch("os.path.isdir", return_value=True), \
         patch("os.scandir", side_effect=PermissionError):
        registry = discover_binaries()

    assert isinstance(registry, dict)
    assert registry["binaries"] == {}


def test_find_bin_dirs_with_prerelease_directory():
    dirs = ["/usr/pgsql-17.rc1/bin", "/usr/lib/postgresql/16/bin"]
    with patch("glob.glob", return_value=dirs), \
         patch("os.path.isdir", return_value=True):
        assert find_bin_dirs() == dirs
