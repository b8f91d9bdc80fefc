"""Observation objects delivered to agents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .serialize import digest, to_serializable


@dataclass(frozen=True)
class Observation:
    """Seat-specific view; perfect-information games expose the whole position."""

    player_id: str

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dictionary."""
        return to_serializable(self)

    def observation_digest(self) -> str:
        """Return a deterministic digest for event logs."""
        return digest(self.to_dict())
