# application/dto/trim_dto.py
# Data Transfer Objects for single-file trim requests, plans and results.

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


@dataclass
class TrimOptions:
    """Settings shared by every file in a run."""
    threshold_db: float = -45.0
    start_seconds: float = 0.05
    stop_seconds: float = 0.20
    in_place: bool = False
    no_backup: bool = False      # only meaningful with in_place
    suffix: str = "_trimmed"     # only used when not in_place
    verbose: bool = False


@dataclass(frozen=True)
class StreamInfo:
    """Probed properties of the first audio stream. None = unknown."""
    bitrate_kbps: Optional[int] = None
    bits_per_sample: Optional[int] = None


@dataclass(frozen=True)
class CopyPlan:
    """Non-destructive mode: write next to the input."""
    output_path: str


@dataclass(frozen=True)
class InPlacePlan:
    """Destructive mode: write to temp, then swap it over the input."""
    temp_path: str
    backup_path: str
    final_path: str


OutputPlan = Union[CopyPlan, InPlacePlan]


class TrimStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass(frozen=True)
class TrimResult:
    """Outcome for a single file. Only OK results carry a path."""
    status: TrimStatus
    output_path: Optional[str] = None

    @classmethod
    def ok(cls, output_path: str) -> "TrimResult":
        return cls(TrimStatus.OK, output_path)

    @classmethod
    def skipped(cls) -> "TrimResult":
        return cls(TrimStatus.SKIPPED)

    @classmethod
    def error(cls) -> "TrimResult":
        return cls(TrimStatus.ERROR)


@dataclass
class BatchSummary:
    """Accumulated results for a sequential batch."""
    results: List[Tuple[str, TrimResult]] = field(default_factory=list)
    lines: List[Tuple[TrimStatus, str]] = field(default_factory=list)
    ok: int = 0
    errors: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return len(self.results)
