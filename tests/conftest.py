import os
from typing import List, Tuple

import pytest

from application.ports.process_runner_port import (
    IProcessRunner,
    ProcessFailure,
    ProcessOutput,
)
from trimmer.tools import ToolPaths

FAKE_TOOLS: ToolPaths = ToolPaths(ffmpeg="fake-ffmpeg", ffprobe="fake-ffprobe")
TRIMMED_BYTES: bytes = b"TRIMMED-AUDIO"
ORIGINAL_BYTES: bytes = b"ORIGINAL-AUDIO-WITH-SILENCE"


class FakeRunner(IProcessRunner):
    """Stands in for ffmpeg/ffprobe: records calls, writes the target file."""

    def __init__(
        self,
        probe_output: str = "",
        probe_fails: bool = False,
        ffmpeg_fails: bool = False,
        partial_write: bool = False,
    ) -> None:
        self.probe_output = probe_output
        self.probe_fails = probe_fails
        self.ffmpeg_fails = ffmpeg_fails
        self.partial_write = partial_write
        self.calls: List[Tuple[str, List[str]]] = []

    @property
    def ffmpeg_calls(self) -> List[List[str]]:
        return [args for exe, args in self.calls if exe == FAKE_TOOLS.ffmpeg]

    @property
    def probe_calls(self) -> List[List[str]]:
        return [args for exe, args in self.calls if exe == FAKE_TOOLS.ffprobe]

    def run(self, executable: str, args: List[str]) -> ProcessOutput:
        self.calls.append((executable, list(args)))

        if executable == FAKE_TOOLS.ffprobe:
            if self.probe_fails:
                raise ProcessFailure(executable, 1, stderr="Invalid data found")
            return ProcessOutput(stdout=self.probe_output, stderr="")

        target: str = args[-1]
        if self.ffmpeg_fails:
            if self.partial_write:
                with open(target, "wb") as f:
                    f.write(b"PARTIAL")
            raise ProcessFailure(executable, 1, stderr="Conversion failed!")

        with open(target, "wb") as f:
            f.write(TRIMMED_BYTES)
        return ProcessOutput(stdout="", stderr="")


def write_input(directory: str, name: str, data: bytes = ORIGINAL_BYTES) -> str:
    path: str = os.path.join(str(directory), name)
    with open(path, "wb") as f:
        f.write(data)
    return path


def read_bytes(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def audio_file(tmp_path) -> str:
    return write_input(str(tmp_path), "song.wav")
