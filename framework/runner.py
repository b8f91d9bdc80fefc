"""Autonomous match runner for AI-vs-AI play of any registered game."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from time import perf_counter
from typing import Any, Mapping, Sequence
from uuid import uuid4

from .errors import AgentExecutionError, AgentTimeoutError, IllegalMoveError, MatchConfigurationError
from .events import EventType, MatchEvent, write_jsonl
from .game import Game, PlayerId
from .result import MatchResult, TerminationReason
from .serialize import digest, to_serializable


@dataclass(frozen=True)
class RunnerConfig:
    """Runtime configuration for match execution."""

    max_turns: int = 500
    move_timeout_sec: float | None = None
    forfeit_on_illegal: bool = True
    max_illegal_retries: int = 0
    event_log_dir: str | Path | None = None


@dataclass(frozen=True)
class MatchRun:
    """Complete execution artifact for one match."""

    result: MatchResult
    events: list[MatchEvent]


@dataclass
class _MatchContext:
    game: Game[Any, Any, Any]
    game_id: str
    seed: int
    agents: dict[PlayerId, Any]
    history: list[MatchEvent] = field(default_factory=list)
    illegal_move_counts: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    move_durations_ms: dict[str, list[float]] = field(default_factory=lambda: defaultdict(list))

    def emit(self, event_type: EventType, turn: int, payload: dict[str, Any]) -> None:
        self.history.append(MatchEvent.create(event_type=event_type, game_id=self.game_id, turn=turn, payload=payload))


class MatchRunner:
    """Runs matches to completion with legality checks and event logging."""

    def __init__(self, config: RunnerConfig | None = None):
        self.config = config or RunnerConfig()

    def run_match(
        self,
        game: Game[Any, Any, Any],
        agents: Mapping[PlayerId, Any] | Sequence[Any],
        seed: int,
        game_config: dict[str, Any] | None = None,
        *,
        game_id: str | None = None,
        log_path: str | Path | None = None,
    ) -> MatchRun:
        """Run a full match and return result + event history."""
        config = game_config or {}
        state = game.new_game(seed=seed, config=config)
        player_ids = list(game.player_ids(state))
        ctx = _MatchContext(
            game=game,
            game_id=game_id or f"{game.game_name}-{seed}-{uuid4().hex[:8]}",
            seed=seed,
            agents=self._normalize_agents(player_ids=player_ids, agents=agents),
        )
        self._validate_agents(player_ids=player_ids, agents=ctx.agents)

        ctx.emit(
            EventType.MATCH_START,
            0,
            {
                "seed": seed,
                "config": to_serializable(config),
                "players": player_ids,
                "initial_state_digest": self._state_digest(state),
            },
        )
        for player_id in player_ids:
            role = game.role_for_player(state, player_id)
            ctx.agents[player_id].reset(ctx.game_id, player_id, role, seed, config)

        turn = 0
        while not game.is_terminal(state):
            if turn >= self.config.max_turns:
                return self._terminate(
                    ctx,
                    state=state,
                    turn=turn,
                    winner=None,
                    reason=TerminationReason.MAX_TURNS,
                    details=f"Reached max_turns={self.config.max_turns}.",
                    log_path=log_path,
                )

            player_id = game.current_player(state)
            if player_id not in ctx.agents:
                raise MatchConfigurationError(f"Missing agent for current player {player_id!r}.")
            agent = ctx.agents[player_id]
            observation = game.observation(state, player_id)
            legal_moves = list(game.legal_moves(state, player_id))
            if not legal_moves:
                return self._terminate(
                    ctx,
                    state=state,
                    turn=turn,
                    winner=None,
                    reason=TerminationReason.DRAW,
                    details=f"{player_id} has no legal moves in a non-terminal state.",
                    log_path=log_path,
                )

            attempt = 0
            while True:
                start = perf_counter()
                try:
                    move = agent.act(observation, legal_moves)
                    if move is None:
                        raise RuntimeError("agent passed while legal moves were available")
                except Exception as exc:
                    error = AgentExecutionError(player_id, f"Agent act() failed: {exc}")
                    ctx.emit(EventType.AGENT_ERROR, turn, {"player_id": player_id, "error": error.to_dict()})
                    return self._terminate(
                        ctx,
                        state=state,
                        turn=turn,
                        winner=game.forfeit_winner(state, player_id, "agent_exception"),
                        reason=TerminationReason.AGENT_EXCEPTION,
                        details=str(error),
                        log_path=log_path,
                    )

                duration_ms = (perf_counter() - start) * 1000.0
                ctx.move_durations_ms[player_id].append(duration_ms)

                limit_ms = self.config.move_timeout_sec * 1000.0 if self.config.move_timeout_sec is not None else None
                if limit_ms is not None and duration_ms > limit_ms:
                    timeout_error = AgentTimeoutError(player_id, f"Move took {duration_ms:.2f}ms > limit {limit_ms:.2f}ms.")
                    ctx.emit(EventType.AGENT_ERROR, turn, {"player_id": player_id, "error": timeout_error.to_dict()})
                    return self._terminate(
                        ctx,
                        state=state,
                        turn=turn,
                        winner=game.forfeit_winner(state, player_id, "timeout"),
                        reason=TerminationReason.TIMEOUT_FORFEIT,
                        details=str(timeout_error),
                        log_path=log_path,
                    )

                legal, reason = game.is_legal(state, player_id, move)
                if legal:
                    break

                ctx.illegal_move_counts[player_id] += 1
                error = IllegalMoveError(player_id, move, reason)
                ctx.emit(
                    EventType.ILLEGAL_MOVE,
                    turn,
                    {
                        "player_id": player_id,
                        "move": to_serializable(move),
                        "reason": reason,
                        "attempt": attempt + 1,
                    },
                )
                try:
                    agent.on_illegal_move(error, observation)
                except Exception:
                    # Illegal-move callback must not break the runner.
                    pass

                attempt += 1
                if self.config.forfeit_on_illegal or attempt > self.config.max_illegal_retries:
                    return self._terminate(
                        ctx,
                        state=state,
                        turn=turn,
                        winner=game.forfeit_winner(state, player_id, "illegal_move"),
                        reason=TerminationReason.ILLEGAL_MOVE_FORFEIT,
                        details=str(error),
                        log_path=log_path,
                    )

            state = game.apply_move(state, player_id, move)
            turn += 1
            ctx.emit(
                EventType.TURN,
                turn,
                {
                    "player_id": player_id,
                    "observation_digest": self._observation_digest(observation),
                    "move": to_serializable(move),
                    "state_digest": self._state_digest(state),
                    "duration_ms": duration_ms,
                },
            )

        game_result = game.outcome(state)
        result = MatchResult(
            game_id=ctx.game_id,
            game_name=game.game_name,
            seed=seed,
            winner=game_result.winner,
            termination_reason=game_result.termination_reason,
            scores=dict(game_result.scores),
            turns=turn,
            stats=self._merge_stats(game_result.stats, ctx),
            details=game_result.details,
            final_state_digest=self._state_digest(state),
        )
        ctx.emit(EventType.TERMINAL, turn, {"result": result.to_dict()})
        return self._finish(ctx, result=result, log_path=log_path)

    def _terminate(
        self,
        ctx: _MatchContext,
        *,
        state: Any,
        turn: int,
        winner: str | None,
        reason: TerminationReason,
        details: str | None,
        log_path: str | Path | None,
    ) -> MatchRun:
        result = MatchResult(
            game_id=ctx.game_id,
            game_name=ctx.game.game_name,
            seed=ctx.seed,
            winner=winner,
            termination_reason=reason,
            scores={},
            turns=turn,
            stats=self._merge_stats({}, ctx),
            details=details,
            final_state_digest=self._state_digest(state),
        )
        ctx.emit(EventType.TERMINAL, turn, {"result": result.to_dict()})
        return self._finish(ctx, result=result, log_path=log_path)

    def _finish(self, ctx: _MatchContext, *, result: MatchResult, log_path: str | Path | None) -> MatchRun:
        resolved_log_path = self._resolve_log_path(log_path=log_path, game_id=ctx.game_id)
        final_result = MatchResult(
            game_id=result.game_id,
            game_name=result.game_name,
            seed=result.seed,
            winner=result.winner,
            termination_reason=result.termination_reason,
            scores=result.scores,
            turns=result.turns,
            stats=result.stats,
            details=result.details,
            final_state_digest=result.final_state_digest,
            event_count=len(ctx.history),
            log_path=str(resolved_log_path) if resolved_log_path is not None else None,
        )
        if resolved_log_path is not None:
            write_jsonl(resolved_log_path, ctx.history)

        for agent in ctx.agents.values():
            try:
                agent.on_game_end(final_result, ctx.history)
            except Exception:
                # End-of-game hooks are optional and must not crash the runner.
                pass
        return MatchRun(result=final_result, events=ctx.history)

    def _resolve_log_path(self, *, log_path: str | Path | None, game_id: str) -> Path | None:
        if log_path is not None:
            return Path(log_path)
        if self.config.event_log_dir is None:
            return None
        return Path(self.config.event_log_dir) / f"{game_id}.jsonl"

    def _merge_stats(self, base_stats: Mapping[str, Any] | None, ctx: _MatchContext) -> dict[str, Any]:
        merged = dict(base_stats or {})
        merged["illegal_moves"] = {player_id: int(count) for player_id, count in ctx.illegal_move_counts.items()}
        merged["move_durations_ms"] = {
            player_id: [float(duration) for duration in durations]
            for player_id, durations in ctx.move_durations_ms.items()
        }
        return merged

    def _validate_agents(self, *, player_ids: Sequence[PlayerId], agents: Mapping[PlayerId, Any]) -> None:
        missing = [player_id for player_id in player_ids if player_id not in agents]
        if missing:
            raise MatchConfigurationError(f"Missing agents for player IDs: {missing}")

    def _normalize_agents(
        self,
        *,
        player_ids: Sequence[PlayerId],
        agents: Mapping[PlayerId, Any] | Sequence[Any],
    ) -> dict[PlayerId, Any]:
        if isinstance(agents, Mapping):
            return dict(agents)
        agent_list = list(agents)
        if len(agent_list) != len(player_ids):
            raise MatchConfigurationError(
                f"Expected {len(player_ids)} agents for sequence input, received {len(agent_list)}."
            )
        return {player_id: agent for player_id, agent in zip(player_ids, agent_list, strict=True)}

    def _state_digest(self, state: Any) -> str:
        if hasattr(state, "state_digest") and callable(state.state_digest):
            return str(state.state_digest())
        return digest(to_serializable(state))

    def _observation_digest(self, observation: Any) -> str:
        if hasattr(observation, "observation_digest") and callable(observation.observation_digest):
            return str(observation.observation_digest())
        return digest(to_serializable(observation))
