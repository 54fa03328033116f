import os
import warnings
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ToolPaths:
    """Executables used for processing and probing, resolved once per run."""
    ffmpeg: str = "ffmpeg"
    ffprobe: str = "ffprobe"


def _which(name: str) -> Optional[str]:
    # Importing pydub builds AudioSegment, which warns when ffmpeg is not on PATH
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", RuntimeWarning)
        warnings.simplefilter("ignore", DeprecationWarning)
        warnings.simplefilter("ignore", SyntaxWarning)
        from pydub.utils import which
    return which(name)


def _resolve(name: str, env_var: str) -> str:
    override: str = os.environ.get(env_var, "").strip()
    if override:
        return override
    # Bare name lets the OS report a missing binary at spawn time
    return _which(name) or name


def resolve_tools() -> ToolPaths:
    """
    Locate ffmpeg / ffprobe.

    FFMPEG_BINARY and FFPROBE_BINARY take priority; otherwise the binaries
    are looked up on PATH.
    """
    return ToolPaths(
        ffmpeg=_resolve("ffmpeg", "FFMPEG_BINARY"),
        ffprobe=_resolve("ffprobe", "FFPROBE_BINARY"),
    )
