from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.exceptions import MaintenanceError


@dataclass(frozen=True)
class AbsenceWindow:
    """Inclusive range of past days eligible for absence marking."""

    start: date
    end: date

    @property
    def is_empty(self) -> bool:
        return self.end < self.start


@dataclass(frozen=True)
class MaintenanceResult:
    """Outcome of the best-effort absence self-heal.

    ``error`` is set when a step failed; the caller logs it and carries on.
    """

    steps: tuple[str, ...] = ()
    window: Optional[AbsenceWindow] = None
    removed: int = 0
    marked: int = 0
    error: Optional[MaintenanceError] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "steps": list(self.steps),
            "window": (
                {"start": self.window.start.isoformat(), "end": self.window.end.isoformat()}
                if self.window and not self.window.is_empty
                else None
            ),
            "removed": self.removed,
            "marked": self.marked,
            "error": str(self.error) if self.error else None,
        }
