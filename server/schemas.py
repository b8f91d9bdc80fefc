"""Pydantic request schemas for the arcade session API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CreateSessionRequest(BaseModel):
    """Request body for starting a session of any registered title."""

    game: str
    difficulty: str = "NORMAL"
    seed: int | None = None


class SubmitMoveRequest(BaseModel):
    """A tagged move payload for a turn-based title, e.g. `{"type": "Place", "index": 4}`."""

    player_id: str | None = None
    move: dict[str, Any]


class ArcadeActionRequest(BaseModel):
    """A whitelisted engine action for an arcade title, e.g. `tick` with `{"delta_ms": 140}`."""

    action: str
    params: dict[str, Any] = Field(default_factory=dict)


class DifficultyRequest(BaseModel):
    difficulty: str


class SimulateRequest(BaseModel):
    """Run one AI-vs-AI match to completion; `agents` is `SEAT=kind,...` with kind a tier or `random`."""

    game: str
    seed: int = 0
    agents: str = ""
    difficulty: str = "NORMAL"
    max_turns: int = Field(default=500, ge=1)
