import os
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Tuple, runtime_checkable

logger = logging.getLogger(__name__)

MASK = "***"


@runtime_checkable
class CommandBuilder(Protocol):
    """
    Contrat commun à tous les builders de commandes PostgreSQL.
    Un builder n'hérite de rien : il suffit qu'il expose ces quatre méthodes
    pour que build_command() et l'executor sachent le lancer.
    """

    def get_program(self) -> str:
        ...

    def get_program_dir(self) -> Optional[str]:
        ...

    def get_args(self) -> List[str]:
        ...

    def get_envs(self) -> List[Tuple[str, str]]:
        ...


@dataclass(frozen=True)
class Command:
    """Descripteur immuable d'un process prêt à être lancé."""

    program: str
    args: Tuple[str, ...] = ()
    envs: Tuple[Tuple[str, str], ...] = ()

    def to_list(self) -> List[str]:
        """argv complet pour subprocess (jamais de shell)."""
        return [self.program] + list(self.args)

    def environ(self, base: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Fusionne les overrides par-dessus l'environnement de base."""
        env = dict(os.environ if base is None else base)
        env.update(dict(self.envs))
        return env

    def to_command_string(self, mask_env: bool = False) -> str:
        return to_command_string(self, mask_env=mask_env)

    def __str__(self):
        return self.to_command_string()


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def program_path(builder: CommandBuilder) -> str:
    """
    Chemin de l'exécutable : program_dir/program si un dossier est fourni,
    sinon le nom nu (résolu plus tard via le PATH).
    """
    program = builder.get_program()
    program_dir = builder.get_program_dir()
    if program_dir is None:
        return program
    return os.path.join(program_dir, program)


def build_command(builder: CommandBuilder) -> Command:
    """Finalise un builder en Command. Pur : appelable autant de fois que voulu."""
    command = Command(
        program=program_path(builder),
        args=tuple(builder.get_args()),
        envs=tuple(builder.get_envs()),
    )
    logger.debug(f"Built command: {command.to_command_string(mask_env=True)}")
    return command


def to_command_string(command: Command, mask_env: bool = False) -> str:
    """
    Rendu texte pour les logs et les tests uniquement.
    Ex : PGPASSWORD="password" "./vacuumlo" "--host" "localhost"
    """
    parts = []
    for name, value in command.envs:
        parts.append(f"{name}={_quote(MASK if mask_env else value)}")
    parts.append(_quote(command.program))
    parts.extend(_quote(arg) for arg in command.args)
    return " ".join(parts)
