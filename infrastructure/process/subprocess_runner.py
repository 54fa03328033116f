# infrastructure/process/subprocess_runner.py
# Implementation of IProcessRunner using subprocess.run.

import logging
import subprocess
from typing import List

from application.ports.process_runner_port import (
    IProcessRunner,
    ProcessFailure,
    ProcessOutput,
)

logger = logging.getLogger(__name__)


class SubprocessRunner(IProcessRunner):
    """Run a binary to completion and capture both output streams as text."""

    def run(self, executable: str, args: List[str]) -> ProcessOutput:
        cmd: List[str] = [executable, *args]
        logger.debug("exec: %s", subprocess.list2cmdline(cmd))

        try:
            proc = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as exc:
            # Missing binary, permission denied, ...
            raise ProcessFailure(executable, None, stderr=str(exc)) from exc

        if proc.returncode != 0:
            raise ProcessFailure(executable, proc.returncode, proc.stdout, proc.stderr)

        return ProcessOutput(stdout=proc.stdout, stderr=proc.stderr)
