# application/ports/process_runner_port.py
# Port interface for running external executables (ffmpeg, ffprobe).
# Domain layer, must not import infrastructure or adapter code.

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class ProcessOutput:
    """Captured text of a successful run."""
    stdout: str
    stderr: str


class ProcessFailure(Exception):
    """Raised when an executable exits non-zero or cannot be spawned."""

    def __init__(
        self,
        executable: str,
        returncode: Optional[int],
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.executable = executable
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        if returncode is None:
            message = f"{executable} could not be started: {stderr}"
        else:
            message = f"{executable} exited with code {returncode}"
        super().__init__(message)


class IProcessRunner(ABC):
    """Abstract base class for external process execution."""

    @abstractmethod
    def run(self, executable: str, args: List[str]) -> ProcessOutput:
        """
        Run an executable to completion.

        Args:
            executable: Path or name of the binary.
            args:       Arguments, not including the executable itself.

        Returns:
            Captured stdout and stderr text.

        Raises:
            ProcessFailure: non-zero exit code or spawn error.
        """
        ...
