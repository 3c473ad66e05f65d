import os
import glob
import json
import re
import logging
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)

# ============================================================
# DISCOVERY : dossiers bin PostgreSQL
# ============================================================

SEARCH_PATHS = [
    "/usr/lib/postgresql/*/bin",
    "/usr/pgsql-*/bin",
    "/usr/pgsql*/bin",
    "/opt/postgresql*/bin",
    "/usr/local/pgsql/bin",
    "/usr/local/bin",
    "/usr/bin",
]


def get_version_from_path(path):
    match = re.search(r'(?:postgresql|pgsql)[/-]?(\d+(?:\.\d+)?)', path)
    return match.group(1) if match else None


def _version_key(path):
    version = get_version_from_path(path)
    if not version:
        return (0,)
    return tuple(int(part) for part in re.findall(r"\d+", version))


def find_bin_dirs():
    """Liste les dossiers bin existants, version la plus récente d'abord."""
    found_dirs = []
    for pattern in SEARCH_PATHS:
        for p in glob.glob(pattern):
            if os.path.isdir(p) and p not in found_dirs:
                found_dirs.append(p)

    # sort() est stable : à version égale on garde l'ordre de SEARCH_PATHS
    found_dirs.sort(key=_version_key, reverse=True)
    return found_dirs


def discover_binaries():
    """
    Scanne les dossiers connus et construit le registry des binaires.
    Le nom nu pointe vers la version la plus récente ; chaque version
    est aussi accessible via un alias 'nom-version' (ex: pg_restore-16).
    """
    registry = {
        "last_scan": datetime.now().isoformat(),
        "binaries": {},
    }

    for base_path in find_bin_dirs():
        version = get_version_from_path(base_path)
        try:
            with os.scandir(base_path) as it:
                for entry in it:
                    try:
                        if entry.is_file() and os.access(entry.path, os.X_OK):
                            if entry.name not in registry["binaries"]:
                                registry["binaries"][entry.name] = entry.path

                            if version:
                                versioned_name = f"{entry.name}-{version}"
                                if versioned_name not in registry["binaries"]:
                                    registry["binaries"][versioned_name] = entry.path
                    except OSError:
                        continue
        except PermissionError:
            logger.warning(f"Permission denied while scanning {base_path}, skipped.")
            continue

    return registry


def find_binary_dir(program: str, version: Optional[str] = None) -> Optional[str]:
    """
    Dossier du binaire demandé, ou None s'il est introuvable.
    Sert à remplir Settings.binary_dir quand PG_BINARY_DIR n'est pas défini.
    """
    name = f"{program}-{version}" if version else program
    path = discover_binaries()["binaries"].get(name)
    if not path:
        logger.info(f"No '{name}' binary found in {SEARCH_PATHS}")
        return None
    return os.path.dirname(path)


# ============================================================
# MAIN (scan only)
# ============================================================

if __name__ == "__main__":
    print(json.dumps(discover_binaries(), indent=4))
