"""Hand a session off to the companion command line tool."""

import shutil
import subprocess
from typing import List, Sequence

from ..core.exceptions import ResumeError
from ..core.types import SessionDescriptor
from .logger import get_logger

logger = get_logger("resume")


def build_resume_command(
    session: SessionDescriptor, command: Sequence[str]
) -> List[str]:
    """Full argv that resumes ``session`` in the companion tool.

    Raises:
        ResumeError: If the session has no stable id or the executable
            cannot be found on PATH
    """
    if not session.id:
        raise ResumeError("Session id not found")
    if not command:
        raise ResumeError("No resume command configured")

    executable = command[0]
    if shutil.which(executable) is None:
        raise ResumeError(
            f"Failed to launch {executable}", f"{executable}: command not found"
        )
    return [*command, session.id]


def run_resume_command(argv: Sequence[str]) -> int:
    """Run the companion tool in the foreground with inherited stdio."""
    logger.info(f"Handing off to: {' '.join(argv)}")
    try:
        completed = subprocess.run(list(argv), check=False)
    except OSError as e:
        raise ResumeError(f"Failed to launch {argv[0]}", str(e)) from e
    return completed.returncode
