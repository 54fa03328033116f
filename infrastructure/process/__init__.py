# infrastructure/process/__init__.py
from .subprocess_runner import SubprocessRunner

__all__ = [
    "SubprocessRunner",
]
