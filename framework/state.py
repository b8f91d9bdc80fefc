"""State conventions for immutable, serializable game states."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Self

from .serialize import digest, to_serializable


@dataclass(frozen=True)
class State:
    """Base immutable state; transitions build new instances with `evolve`."""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dictionary."""
        return to_serializable(self)

    def evolve(self, **changes: Any) -> Self:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def state_digest(self) -> str:
        """Return a deterministic digest for logging/replay."""
        return digest(self.to_dict())
