"""FastAPI server exposing the arcade engines to a local UI shell."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from framework.serialize import json_dumps
from server.schemas import (
    ArcadeActionRequest,
    CreateSessionRequest,
    DifficultyRequest,
    SimulateRequest,
    SubmitMoveRequest,
)
from server.session import SessionStore, list_games, simulate_match

app = FastAPI(title="Arcade Local API", version="0.1.0")
store = SessionStore()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _unknown_session(session_id: str, exc: KeyError) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Unknown session_id: {session_id}")


@app.get("/api/health")
def health() -> dict[str, str]:
    """Healthcheck endpoint."""
    return {"status": "ok"}


@app.get("/api/games")
def games() -> list[dict[str, Any]]:
    return list_games()


@app.post("/api/session/new")
def new_session(request: CreateSessionRequest) -> dict:
    """Start a session; AI seats that move first have already played."""
    try:
        session = store.create_session(game=request.game, difficulty=request.difficulty, seed=request.seed)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc.args[0])) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return session.view()


@app.get("/api/session/{session_id}")
def get_session(session_id: str) -> dict:
    try:
        return store.get(session_id).view()
    except KeyError as exc:
        raise _unknown_session(session_id, exc) from exc


@app.post("/api/session/{session_id}/move")
def submit_move(session_id: str, request: SubmitMoveRequest) -> dict:
    """Submit a tagged JSON move; illegal moves come back with `accepted: false`."""
    try:
        session = store.get(session_id)
    except KeyError as exc:
        raise _unknown_session(session_id, exc) from exc

    try:
        return session.submit_move(player_id=request.player_id, move_payload=request.move)
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.post("/api/session/{session_id}/action")
def perform_action(session_id: str, request: ArcadeActionRequest) -> dict:
    try:
        session = store.get(session_id)
    except KeyError as exc:
        raise _unknown_session(session_id, exc) from exc

    try:
        return session.perform_action(action=request.action, params=request.params)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.post("/api/session/{session_id}/difficulty")
def set_difficulty(session_id: str, request: DifficultyRequest) -> dict:
    """Change the AI tier; this always restarts the round."""
    try:
        session = store.get(session_id)
    except KeyError as exc:
        raise _unknown_session(session_id, exc) from exc

    try:
        return session.set_difficulty(request.difficulty)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.post("/api/session/{session_id}/reset")
def reset_session(session_id: str) -> dict:
    try:
        return store.get(session_id).reset()
    except KeyError as exc:
        raise _unknown_session(session_id, exc) from exc


@app.get("/api/session/{session_id}/events", response_model=None)
def get_events(session_id: str, format: str = Query(default="array")) -> Any:
    """Return full event history as array (default) or JSONL text."""
    try:
        events = store.all_events(session_id)
    except KeyError as exc:
        raise _unknown_session(session_id, exc) from exc

    if format == "jsonl":
        text = "\n".join(json_dumps(event) for event in events)
        return PlainTextResponse(content=text, media_type="application/jsonl")
    return events


@app.post("/api/simulate")
def simulate(request: SimulateRequest) -> dict:
    """Run a seeded AI-vs-AI match to completion."""
    try:
        return simulate_match(
            game=request.game,
            seed=request.seed,
            agents=request.agents,
            difficulty=request.difficulty,
            max_turns=request.max_turns,
        )
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc.args[0])) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.main:app", host="0.0.0.0", port=8000, reload=True)
