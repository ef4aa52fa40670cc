"""Locked dependency versions scraped from `mix deps` output."""

import logging
import re
import subprocess
from pathlib import Path

from .config import Settings

logger = logging.getLogger(__name__)

LOCK_LINE_PATTERN = re.compile(r"locked at\s+(\S+)\s+(\S+)")
NO_PROJECT_MARKER = "Could not find a Mix.Project"


def parse_lock_output(output: str) -> dict[str, str]:
    """Extract name -> locked version pairs from `mix deps` output.

    Lines look like ``locked at 1.0.2 (pow) 0cc0a9b5``; anything else is ignored.
    """
    locks: dict[str, str] = {}
    for line in output.splitlines():
        match = LOCK_LINE_PATTERN.search(line)
        if match:
            version, name_with_parens = match.groups()
            locks[name_with_parens.replace("(", "").replace(")", "")] = version
    return locks


class MixLockReader:
    """Reads currently locked versions for a Mix project."""

    def __init__(self, project_dir: Path, mix_command: str = "mix"):
        self.project_dir = Path(project_dir)
        self.mix_command = mix_command

    def _run_deps(self) -> subprocess.CompletedProcess:
        return subprocess.run(
            [self.mix_command, "deps"],
            cwd=self.project_dir,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            encoding="utf-8",
            errors="replace",
        )

    def read(self) -> dict[str, str]:
        """Return locked versions, or an empty mapping when none are available."""
        try:
            result = self._run_deps()
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning("Could not run `%s deps`: %s", self.mix_command, e)
            return {}

        output = result.stdout or ""
        if result.returncode != 0:
            if NO_PROJECT_MARKER in output:
                logger.info("No Mix.Project found in %s", self.project_dir)
            else:
                logger.warning(
                    "`%s deps` exited with status %d; assuming no locked dependencies",
                    self.mix_command,
                    result.returncode,
                )
            return {}

        locks = parse_lock_output(output)
        logger.debug("Found %d locked dependencies", len(locks))
        return locks


def current_locks(settings: Settings) -> dict[str, str]:
    """Return the locked dependency map for the configured project.

    Args:
        settings: Runtime settings holding the project directory and mix executable

    Returns:
        Mapping of package name to locked version
    """
    reader = MixLockReader(settings.project_dir, mix_command=settings.mix_command)
    return reader.read()
