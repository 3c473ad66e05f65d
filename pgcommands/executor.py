import os
import subprocess
import shutil
import logging

from pgcommands.command_builder import Command, CommandBuilder, build_command
from pgcommands.runtime.audit import log_execution

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 45
TIMEOUT_EXIT_CODE = 124


def resolve_program(command: Command) -> str:
    """
    Chemin absolu du binaire. Un programme sans dossier est cherché dans
    le PATH ; s'il est introuvable on le laisse tel quel et Popen échouera.
    """
    if command.program != os.path.basename(command.program):
        return command.program
    return shutil.which(command.program) or command.program


def run_command(command, timeout=DEFAULT_TIMEOUT, env=None) -> dict:
    """
    Lance un Command (ou un builder, finalisé au passage) sans shell.
    Les overrides (PGPASSWORD...) sont fusionnés sur `env` ou os.environ,
    jamais ajoutés à l'argv.
    """
    if isinstance(command, CommandBuilder):
        command = build_command(command)

    audit_cmd = command.to_command_string(mask_env=True)
    cmd_list = command.to_list()
    cmd_list[0] = resolve_program(command)
    executed_cmd_str = " ".join(cmd_list)

    logger.info(f"Executing: {executed_cmd_str}")
    try:
        process = subprocess.Popen(
            cmd_list,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=command.environ(env),
            text=True
        )
    except (OSError, ValueError) as e:
        # ValueError : octet NUL dans un argument ou une variable d'env
        logger.warning(f"Failed to start {cmd_list[0]}: {e}")
        log_execution(audit_cmd, executed_cmd_str, -1, "", str(e))
        return {"stdout": "", "stderr": str(e), "exit_code": -1, "command_executed": executed_cmd_str}

    try:
        stdout, stderr = process.communicate(timeout=timeout)
        exit_code = process.returncode
    except subprocess.TimeoutExpired:
        process.kill()
        stdout, stderr = process.communicate()
        exit_code = TIMEOUT_EXIT_CODE
        stderr = (stderr or "") + f"\nError: Process timed out ({timeout}s)"

    if exit_code != 0:
        logger.warning(f"{command.program} exited with code {exit_code}")

    log_execution(audit_cmd, executed_cmd_str, exit_code, stdout, stderr)

    return {
        "stdout": stdout,
        "stderr": stderr,
        "exit_code": exit_code,
        "command_executed": executed_cmd_str
    }
