import os
import shutil

import numpy as np
import pytest
import soundfile as sf

from application.dto.trim_dto import TrimOptions, TrimStatus
from infrastructure.process import SubprocessRunner
from trimmer.core import trim_file
from trimmer.tools import resolve_tools

from conftest import read_bytes

pytestmark = pytest.mark.skipif(
    shutil.which("ffmpeg") is None or shutil.which("ffprobe") is None,
    reason="ffmpeg/ffprobe not installed",
)

# Test Constants
SAMPLE_RATE: int = 44100
SILENCE_SEC: float = 0.5
TONE_SEC: float = 1.0


# Helpers


def make_padded_wav(path: str, subtype: str = "PCM_16", sr: int = SAMPLE_RATE) -> None:
    """Write a mono WAV: silence, 440 Hz tone, silence."""
    pad: np.ndarray = np.zeros(int(sr * SILENCE_SEC), dtype=np.float32)
    t: np.ndarray = np.linspace(0, TONE_SEC, int(sr * TONE_SEC), dtype=np.float32)
    tone: np.ndarray = (0.5 * np.sin(2 * np.pi * 440 * t)).astype(np.float32)
    sf.write(path, np.concatenate([pad, tone, pad]), sr, subtype=subtype)


def duration(path: str) -> float:
    info = sf.info(path)
    return info.frames / info.samplerate


class TestEndToEnd:
    """Real ffmpeg/ffprobe runs on generated audio."""

    def test_copy_mode_trims_padding(self, tmp_path) -> None:
        in_path: str = os.path.join(str(tmp_path), "take.wav")
        make_padded_wav(in_path)
        before: bytes = read_bytes(in_path)

        result = trim_file(in_path, TrimOptions(), resolve_tools(), SubprocessRunner())

        assert result.status is TrimStatus.OK
        assert result.output_path == os.path.join(str(tmp_path), "take_trimmed.wav")
        trimmed: float = duration(result.output_path)
        assert trimmed < duration(in_path) - 0.3
        assert trimmed > TONE_SEC * 0.9
        assert read_bytes(in_path) == before

    def test_in_place_keeps_24_bit_depth(self, tmp_path) -> None:
        in_path: str = os.path.join(str(tmp_path), "take.wav")
        make_padded_wav(in_path, subtype="PCM_24")
        original: bytes = read_bytes(in_path)

        result = trim_file(in_path, TrimOptions(in_place=True), resolve_tools(), SubprocessRunner())

        assert result.status is TrimStatus.OK
        assert sf.info(in_path).subtype == "PCM_24"
        assert duration(in_path) < 2 * SILENCE_SEC + TONE_SEC - 0.3
        backup: str = os.path.join(str(tmp_path), "take.bak.wav")
        assert read_bytes(backup) == original
        assert sorted(os.listdir(str(tmp_path))) == ["take.bak.wav", "take.wav"]

    def test_corrupt_input_is_error_and_untouched(self, tmp_path) -> None:
        in_path: str = os.path.join(str(tmp_path), "broken.mp3")
        with open(in_path, "wb") as f:
            f.write(b"definitely not audio")

        result = trim_file(in_path, TrimOptions(in_place=True), resolve_tools(), SubprocessRunner())

        assert result.status is TrimStatus.ERROR
        assert os.listdir(str(tmp_path)) == ["broken.mp3"]
        assert read_bytes(in_path) == b"definitely not audio"
