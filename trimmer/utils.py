import os
import time
from typing import Optional

from application.dto.trim_dto import CopyPlan, InPlacePlan, OutputPlan

VERSION: str = "1.0.0"

# Supported formats (matched case-insensitively)
SUPPORTED_FORMATS: set[str] = {".mp3", ".wav", ".ogg"}

# Default parameters
DEFAULT_OPTIONS: dict[str, float] = {
    "threshold": -45.0,
    "start": 0.05,
    "stop": 0.20,
}
DEFAULT_SUFFIX: str = "_trimmed"

TEMP_MARKER: str = ".__tmp_"
BACKUP_MARKER: str = ".bak"


def get_extension(path: str) -> str:
    """Return the lower-cased extension of *path* (e.g. '.mp3')."""
    return os.path.splitext(path)[1].lower()


def is_supported(path: str) -> bool:
    return get_extension(path) in SUPPORTED_FORMATS


# Validation helpers

def validate_threshold(value: float) -> None:
    """Raise ValueError unless the silence threshold is a negative dB level."""
    # HIG: Clarity: states valid range and actual value
    if not value < 0:
        raise ValueError(
            f"Parameter 'threshold' must be negative (dB). Got: {value}.\n"
            f"    → Example: --threshold -45"
        )


def validate_duration(value: float, name: str) -> None:
    """Raise ValueError if a duration in seconds is negative."""
    if not value >= 0:
        raise ValueError(
            f"Parameter '{name}' must be zero or more seconds. Got: {value}.\n"
            f"    → Example: --{name} 0.2"
        )

# Path helpers

def get_output_path(input_path: str, suffix: str = DEFAULT_SUFFIX) -> str:
    """
    Output path for copy mode: same directory, base + suffix + same extension.

    Example: music/song.mp3, suffix='_trimmed'  →  music/song_trimmed.mp3
    """
    base: str
    ext: str
    base, ext = os.path.splitext(input_path)
    return f"{base}{suffix}{ext}"


def get_backup_path(input_path: str) -> str:
    """Example: song.wav  →  song.bak.wav"""
    base, ext = os.path.splitext(input_path)
    return f"{base}{BACKUP_MARKER}{ext}"


def get_temp_path(input_path: str, token: Optional[int] = None) -> str:
    """Example: song.wav  →  song.__tmp_1718000000000000000.wav"""
    if token is None:
        token = time.time_ns()
    base, ext = os.path.splitext(input_path)
    return f"{base}{TEMP_MARKER}{token}{ext}"


def plan_output(input_path: str, suffix: str, in_place: bool) -> OutputPlan:
    """Compute where the processed audio goes for the given mode."""
    if in_place:
        return InPlacePlan(
            temp_path=get_temp_path(input_path),
            backup_path=get_backup_path(input_path),
            final_path=input_path,
        )
    return CopyPlan(output_path=get_output_path(input_path, suffix))
