"""Base move abstractions used by all games."""

from __future__ import annotations

from abc import ABC
from dataclasses import fields, is_dataclass
from typing import Any, ClassVar, Mapping, Self

from .serialize import to_serializable


class Move(ABC):
    """Base class for one action a seat can take (a piece move, a bet, a discard)."""

    move_type: ClassVar[str] = "Move"

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON payload tagged with the move type."""
        if is_dataclass(self):
            payload = {field.name: to_serializable(getattr(self, field.name)) for field in fields(self)}
        else:
            payload = {
                key: to_serializable(value)
                for key, value in vars(self).items()
                if not key.startswith("_")
            }
        payload["type"] = self.move_type
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Build the move from a dictionary payload."""
        kwargs = {key: value for key, value in data.items() if key not in {"type", "move_type"}}
        return cls(**kwargs)  # type: ignore[misc, call-arg]


def moves_by_type(data: Mapping[str, Any], registry: Mapping[str, type[Move]], game_name: str) -> Move:
    """Dispatch a payload to the move class registered under its `type` tag."""
    move_type = data.get("type") or data.get("move_type")
    move_cls = registry.get(str(move_type))
    if move_cls is None:
        raise ValueError(f"Unknown {game_name} move type: {move_type!r}")
    return move_cls.from_dict(data)
