"""Dotted field paths into compared resources."""

from __future__ import annotations

import json
from dataclasses import dataclass, field


@dataclass
class Path:
    """A route of field names to a particular field within a compared resource."""

    parts: list[str] = field(default_factory=list)

    @classmethod
    def from_dotted(cls, dotted: str) -> Path:
        """Build a Path from dotted notation such as ``"Author.Name"``."""
        return cls(dotted.split("."))

    def push(self, part: str) -> None:
        """Append a part to the end of the path."""
        self.parts.append(part)

    def pop(self) -> None:
        """Remove the last part of the path, if there is one."""
        if self.parts:
            self.parts.pop()

    def contains(self, subject: str) -> bool:
        """Return True if the dotted ``subject`` is a prefix of this path.

        For a path ``A.B``: ``A`` and ``A.B`` match; ``A.B.C``, ``B`` and
        ``A.C`` do not.
        """
        wanted = subject.split(".")
        if len(wanted) > len(self.parts):
            return False
        return all(mine == theirs for mine, theirs in zip(self.parts, wanted))

    def to_json(self) -> str:
        """Return the JSON encoding of the path."""
        return json.dumps({"Parts": self.parts}, separators=(",", ":"))

    def __str__(self) -> str:
        return ".".join(self.parts)