"""
Result records for a post-processing run.
"""

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class StageStats:
    """Counts the outcome of every item handled by a single pipeline stage."""

    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    failures: dict[str, str] = field(default_factory=dict)
    elapsed_s: float = 0.0

    def record_success(self) -> None:
        self.succeeded += 1

    def record_skip(self) -> None:
        self.skipped += 1

    def record_failure(self, item: str, error: object) -> None:
        """Counts a failure. Only the latest error is kept for each item."""
        self.failed += 1
        self.failures[item] = str(error)

    @property
    def total(self) -> int:
        return self.succeeded + self.failed + self.skipped


@dataclass
class PostProcessStats:
    """Tracks the results of each stage of a post-processing run."""

    tagging_sets: int = 0
    collection_title: Optional[str] = None
    destination: Optional[str] = None
    cover_promoted: Optional[str] = None
    source_files_deleted: int = 0
    leftover_files: list[str] = field(default_factory=list)
    fatal_error: Optional[str] = None

    tagging: StageStats = field(default_factory=StageStats)
    renaming: StageStats = field(default_factory=StageStats)
    moving: StageStats = field(default_factory=StageStats)
    deletion: StageStats = field(default_factory=StageStats)

    _start_time: float = field(default_factory=time.monotonic, repr=False)

    @property
    def is_fatal(self) -> bool:
        return self.fatal_error is not None

    @property
    def elapsed_s(self) -> float:
        return time.monotonic() - self._start_time

    def stages(self) -> dict[str, StageStats]:
        return {
            "Tagging": self.tagging,
            "Renaming": self.renaming,
            "Moving": self.moving,
            "Deletion": self.deletion,
        }

    @property
    def total_failures(self) -> int:
        return sum(stage.failed for stage in self.stages().values())
