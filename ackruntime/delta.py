"""Differences found between two compared resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ackruntime.path import Path


@dataclass
class Difference:
    """The values of two compared resources at one field path."""

    path: Path
    a: Any
    b: Any


@dataclass
class Delta:
    """The collection of differences between two resources of the same type."""

    differences: list[Difference] = field(default_factory=list)

    def different_at(self, subject: str) -> bool:
        """Return True if any difference lies at or under the dotted ``subject``."""
        return any(diff.path.contains(subject) for diff in self.differences)

    def add(self, path: str, a: Any, b: Any) -> None:
        """Record a difference at the dotted ``path``."""
        self.differences.append(Difference(Path.from_dotted(path), a, b))