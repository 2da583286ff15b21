"""Core data structures for the water sort puzzle.

Model reminders:
- A tube is a bounded stack of colors, index 0 is the bottom, the last item is the top.
- A puzzle state is an ordered list of tubes addressed by 0-based index.
- A move is a ``(from_index, to_index)`` pair.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


Move = Tuple[int, int]


@dataclass(frozen=True)
class Color:
    """A named color; equality and hashing cover the name and all channels."""

    name: str
    r: int
    g: int
    b: int

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def __str__(self) -> str:
        return self.name


class PourError(ValueError):
    """Raised when a pour or move is not allowed."""

    kind = "PourError"


class MaxCapacityError(PourError):
    kind = "MaxCapacity"

    def __init__(self, message: str = "destination tube is full") -> None:
        super().__init__(message)


class NoContentError(PourError):
    kind = "NoContent"

    def __init__(self, message: str = "source tube is empty") -> None:
        super().__init__(message)


class CantMoveError(PourError):
    kind = "CantMove"

    def __init__(self, message: str = "completed tubes cannot be poured from or into") -> None:
        super().__init__(message)


class DiffColorError(PourError):
    kind = "DiffColor"

    def __init__(self, message: str = "top colors differ") -> None:
        super().__init__(message)


class InvalidMoveError(PourError):
    """Raised for moves that do not address two distinct existing tubes."""

    kind = "InvalidMove"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass
class Tube:
    """A capacity-bounded stack of colors."""

    capacity: int
    content: List[Color] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ValueError(f"tube capacity must be positive, got {self.capacity}")
        if len(self.content) > self.capacity:
            raise ValueError(f"tube holds {len(self.content)} units but capacity is {self.capacity}")

    def __len__(self) -> int:
        return len(self.content)

    def top(self) -> Optional[Color]:
        return self.content[-1] if self.content else None

    def clone(self) -> "Tube":
        return Tube(self.capacity, list(self.content))

    def key(self) -> Tuple:
        return (self.capacity, tuple(self.content))


@dataclass
class PuzzleState:
    """Ordered collection of tubes.

    States used as search nodes are never mutated; the in-place engine helpers
    exist for playback and interactive play, and they reset ``_key_cache``.
    """

    tubes: List[Tube]
    _key_cache: Optional[Tuple] = field(default=None, init=False, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.tubes)

    def clone(self) -> "PuzzleState":
        """Return a deep copy of the state."""

        clone_state = PuzzleState(tubes=[tube.clone() for tube in self.tubes])
        clone_state._key_cache = self._key_cache
        return clone_state

    def key(self) -> Tuple:
        """Return a hashable key capturing every tube's capacity and content."""

        if self._key_cache is None:
            self._key_cache = tuple(tube.key() for tube in self.tubes)
        return self._key_cache
