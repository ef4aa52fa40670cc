"""Runs the Mix commands that follow a manifest edit."""

import logging
import subprocess

from .config import Settings
from .models import BuildStepResult

logger = logging.getLogger(__name__)

BUILD_STEPS = (["deps.get"], ["format"])


def run_build_steps(settings: Settings) -> list[BuildStepResult]:
    """Fetch dependencies and format the project.

    Output of each command goes straight to the terminal. Failures are
    recorded in the results and never raised; every step is attempted.
    """
    results = []
    for args in BUILD_STEPS:
        command = [settings.mix_command, *args]
        logger.info("Running %s...", " ".join(command))
        step = BuildStepResult(command=command)

        try:
            completed = subprocess.run(command, cwd=settings.project_dir)
            step.returncode = completed.returncode
            if completed.returncode != 0:
                step.error = f"exited with status {completed.returncode}"
        except OSError as e:
            step.error = str(e)

        results.append(step)

    return results
