"""Smoke tests for the generic runner and arena across every turn-based title."""

from __future__ import annotations

import json

import pytest

from framework.agents.policy_agent import PolicyAgent
from framework.agents.random_agent import RandomAgent
from framework.arena import Arena, build_agent, main, parse_agent_spec
from framework.difficulty import Difficulty
from framework.events import EventType
from framework.game import Game
from framework.registry import get_entry, turn_based_names
from framework.result import TerminationReason
from framework.runner import MatchRunner, RunnerConfig
from tictactoe.tictactoe_ai import choose_move as tictactoe_policy
from tictactoe.tictactoe_game import TicTacToeGame


def _player_ids(game: Game) -> list[str]:
    return list(game.player_ids(game.new_game(seed=0, config={})))


def _random_agents(game: Game) -> dict[str, RandomAgent]:
    return {player_id: RandomAgent(f"random-{player_id.lower()}") for player_id in _player_ids(game)}


@pytest.mark.parametrize("name", turn_based_names())
def test_seeded_random_matches_complete_without_crashes(name: str) -> None:
    game_factory = get_entry(name).game_factory()
    arena = Arena(runner=MatchRunner(RunnerConfig(max_turns=300)))

    summary = arena.run_series(
        game_factory=game_factory,
        agents_factory=lambda _: _random_agents(game_factory()),
        seeds=[11, 12],
    )

    assert len(summary.results) == 2
    for result in summary.results:
        assert result.game_name == name
        assert result.termination_reason in (
            TerminationReason.NORMAL_WIN,
            TerminationReason.DRAW,
            TerminationReason.MAX_TURNS,
        )


def test_same_seed_replays_the_same_match() -> None:
    runner = MatchRunner(RunnerConfig(max_turns=100))
    first = runner.run_match(game=TicTacToeGame(), agents=_random_agents(TicTacToeGame()), seed=5, game_id="replay")
    second = runner.run_match(game=TicTacToeGame(), agents=_random_agents(TicTacToeGame()), seed=5, game_id="replay")
    assert first.result.final_state_digest == second.result.final_state_digest
    assert [event.payload.get("move") for event in first.events] == [event.payload.get("move") for event in second.events]


def test_max_turns_stops_a_long_match() -> None:
    run = MatchRunner(RunnerConfig(max_turns=2)).run_match(
        game=TicTacToeGame(), agents=_random_agents(TicTacToeGame()), seed=1
    )
    assert run.result.termination_reason is TerminationReason.MAX_TURNS
    assert run.result.turns == 2
    assert run.events[0].event_type is EventType.MATCH_START
    assert run.events[-1].event_type is EventType.TERMINAL


def test_hard_tictactoe_never_loses_to_random() -> None:
    arena = Arena(runner=MatchRunner(RunnerConfig(max_turns=20)))
    summary = arena.run_series(
        game_factory=TicTacToeGame,
        agents_factory=lambda _: {
            "X": RandomAgent("random-x"),
            "O": PolicyAgent("hard-o", tictactoe_policy, Difficulty.HARD),
        },
        seeds=range(6),
    )
    assert "X" not in summary.wins


def test_match_log_is_written_as_jsonl(tmp_path) -> None:
    log_path = tmp_path / "match.jsonl"
    run = MatchRunner().run_match(
        game=TicTacToeGame(), agents=_random_agents(TicTacToeGame()), seed=3, log_path=log_path
    )
    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == run.result.event_count == len(run.events)
    assert json.loads(lines[0])["event_type"] == EventType.MATCH_START.value


def test_round_robin_plays_each_pairing_both_ways() -> None:
    arena = Arena(runner=MatchRunner(RunnerConfig(max_turns=20)))
    competitors = {
        "random": lambda player_id: RandomAgent(f"random-{player_id.lower()}"),
        "hard": lambda player_id: build_agent("hard", player_id, tictactoe_policy),
    }
    summary = arena.run_round_robin(game_factory=TicTacToeGame, competitors=competitors, seeds=[1, 2])
    assert len(summary.results) == 4
    assert summary.competitor_stats["hard"]["losses"] == 0
    assert summary.ratings["hard"] >= summary.ratings["random"]


def test_agent_spec_assigns_tiers_per_seat() -> None:
    agents = parse_agent_spec("X=random, O=hard", ["X", "O"], tictactoe_policy)
    assert isinstance(agents["X"], RandomAgent)
    assert isinstance(agents["O"], PolicyAgent)
    assert agents["O"].difficulty is Difficulty.HARD
    defaulted = parse_agent_spec("", ["X", "O"], tictactoe_policy, "EASY")
    assert all(agent.difficulty is Difficulty.EASY for agent in defaulted.values())


@pytest.mark.parametrize("spec", ["X", "Z=hard", "X=impossible"])
def test_agent_spec_rejects_bad_entries(spec: str) -> None:
    with pytest.raises(ValueError):
        parse_agent_spec(spec, ["X", "O"], tictactoe_policy)


def test_cli_writes_summary_json(tmp_path, capsys) -> None:
    output = tmp_path / "out" / "summary.json"
    exit_code = main(["--game", "connectfour", "--num-games", "2", "--seed", "7", "--output", str(output)])
    assert exit_code == 0
    summary = json.loads(output.read_text(encoding="utf-8"))
    assert len(summary["results"]) == 2
    assert json.loads(capsys.readouterr().out) == summary
