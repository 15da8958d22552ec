"""A comparison reporter that collects the paths of unequal fields."""

from __future__ import annotations

import json
from dataclasses import dataclass, field


@dataclass
class DiffItem:
    """A single reported difference, identified by its field path."""

    path: str

    def __str__(self) -> str:
        return json.dumps(self.path, ensure_ascii=False) + "\n"


@dataclass
class Reporter:
    """Tracks the current field path during a comparison and records differences."""

    differences: list[DiffItem] = field(default_factory=list)
    _steps: list[str] = field(default_factory=list, repr=False)

    def push_step(self, step: str) -> None:
        """Descend into the named field."""
        self._steps.append(str(step))

    def pop_step(self) -> None:
        """Return to the parent field; raises IndexError at the root."""
        self._steps.pop()

    def report(self, equal: bool) -> None:
        """Record the current path as a difference unless the values were equal."""
        if not equal:
            self.differences.append(DiffItem(".".join(self._steps)))

    def __str__(self) -> str:
        return "\n".join(str(diff) for diff in self.differences)