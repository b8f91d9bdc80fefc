"""Arena orchestration for seeded AI-vs-AI series and difficulty round-robins."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from itertools import combinations
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence

from .agents.policy_agent import PolicyAgent
from .agents.random_agent import RandomAgent
from .difficulty import DEFAULT_DIFFICULTY, Difficulty
from .game import Game
from .registry import get_entry, turn_based_names
from .result import MatchResult
from .runner import MatchRunner, RunnerConfig
from .serialize import json_dumps, to_serializable


@dataclass(frozen=True)
class ArenaSummary:
    """Aggregated output from a set of matches."""

    results: list[MatchResult]
    wins: dict[str, int]
    win_rates: dict[str, float]
    draws: int
    ratings: dict[str, float] = field(default_factory=dict)
    competitor_stats: dict[str, dict[str, int]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable summary."""
        return {
            "results": [result.to_dict() for result in self.results],
            "wins": dict(self.wins),
            "win_rates": dict(self.win_rates),
            "draws": self.draws,
            "ratings": dict(self.ratings),
            "competitor_stats": to_serializable(self.competitor_stats),
        }


class Arena:
    """High-level interface for running many matches."""

    def __init__(self, runner: MatchRunner | None = None):
        self.runner = runner or MatchRunner()
        self.last_events: list[Any] = []

    def run_match(
        self,
        game: Game[Any, Any, Any],
        agents: Mapping[str, Any] | Sequence[Any],
        seed: int,
        game_config: dict[str, Any] | None = None,
        *,
        game_id: str | None = None,
        log_path: str | Path | None = None,
    ) -> MatchResult:
        """Run one match and return a `MatchResult`."""
        run = self.runner.run_match(
            game=game,
            agents=agents,
            seed=seed,
            game_config=game_config,
            game_id=game_id,
            log_path=log_path,
        )
        self.last_events = run.events
        return run.result

    def run_series(
        self,
        game_factory: Callable[[], Game[Any, Any, Any]],
        agents_factory: (
            Mapping[str, Any]
            | Sequence[Any]
            | Callable[[int], Mapping[str, Any] | Sequence[Any]]
        ),
        seeds: Sequence[int],
        game_config: dict[str, Any] | None = None,
    ) -> ArenaSummary:
        """Run a seeded series and aggregate win rates."""
        results: list[MatchResult] = []
        for seed in seeds:
            game = game_factory()
            agents = agents_factory(seed) if callable(agents_factory) else agents_factory
            result = self.run_match(game=game, agents=agents, seed=seed, game_config=game_config)
            results.append(result)
        return self._summarize_results(results)

    def run_round_robin(
        self,
        game_factory: Callable[[], Game[Any, Any, Any]],
        competitors: Mapping[str, Callable[[str], Any]],
        seeds: Sequence[int],
        game_config: dict[str, Any] | None = None,
    ) -> ArenaSummary:
        """
        Run every pairing of competitors, both ways round.

        The first half of the seats in turn order is "home", the rest "away";
        each pairing is played once with each competitor at home.
        """
        if not seeds:
            return ArenaSummary(results=[], wins={}, win_rates={}, draws=0, ratings={}, competitor_stats={})

        sample_game = game_factory()
        sample_state = sample_game.new_game(seed=seeds[0], config=game_config or {})
        player_ids = list(sample_game.player_ids(sample_state))
        home_slots, away_slots = self._split_seats(player_ids)

        results: list[MatchResult] = []
        competitor_stats = {name: {"wins": 0, "losses": 0, "draws": 0} for name in competitors}
        ratings = {name: 1000.0 for name in competitors}

        for first, second in combinations(competitors.keys(), 2):
            for home, away in ((first, second), (second, first)):
                for seed in seeds:
                    agents = {
                        player_id: competitors[home if player_id in home_slots else away](player_id)
                        for player_id in player_ids
                    }
                    result = self.run_match(game=game_factory(), agents=agents, seed=seed, game_config=game_config)
                    results.append(result)

                    if result.winner in home_slots:
                        winner = home
                    elif result.winner in away_slots:
                        winner = away
                    else:
                        winner = None
                    if winner is None:
                        competitor_stats[home]["draws"] += 1
                        competitor_stats[away]["draws"] += 1
                        self._update_elo(ratings, home, away, score_home=0.5)
                    elif winner == home:
                        competitor_stats[home]["wins"] += 1
                        competitor_stats[away]["losses"] += 1
                        self._update_elo(ratings, home, away, score_home=1.0)
                    else:
                        competitor_stats[away]["wins"] += 1
                        competitor_stats[home]["losses"] += 1
                        self._update_elo(ratings, home, away, score_home=0.0)

        summary = self._summarize_results(results)
        return ArenaSummary(
            results=summary.results,
            wins=summary.wins,
            win_rates=summary.win_rates,
            draws=summary.draws,
            ratings=ratings,
            competitor_stats=competitor_stats,
        )

    def _split_seats(self, player_ids: Sequence[str]) -> tuple[list[str], list[str]]:
        split = max(len(player_ids) // 2, 1)
        return list(player_ids[:split]), list(player_ids[split:])

    def _summarize_results(self, results: Sequence[MatchResult]) -> ArenaSummary:
        wins: dict[str, int] = {}
        draws = 0
        for result in results:
            if result.winner is None:
                draws += 1
                continue
            wins[result.winner] = wins.get(result.winner, 0) + 1
        total = len(results) if results else 1
        win_rates = {winner: count / total for winner, count in wins.items()}
        return ArenaSummary(
            results=list(results),
            wins=wins,
            win_rates=win_rates,
            draws=draws,
            ratings={},
            competitor_stats={},
        )

    def _update_elo(self, ratings: dict[str, float], home: str, away: str, score_home: float, k: float = 16.0) -> None:
        home_rating = ratings[home]
        away_rating = ratings[away]
        expected_home = 1.0 / (1.0 + 10.0 ** ((away_rating - home_rating) / 400.0))
        expected_away = 1.0 - expected_home
        ratings[home] = home_rating + k * (score_home - expected_home)
        ratings[away] = away_rating + k * ((1.0 - score_home) - expected_away)


def build_agent(kind: str, player_id: str, policy: Callable[..., Any]) -> Any:
    """`random` or a difficulty tier (`easy`, `normal`, `hard`)."""
    if kind.strip().lower() == "random":
        return RandomAgent(f"random-{player_id.lower()}")
    difficulty = Difficulty.parse(kind)
    return PolicyAgent(f"{difficulty.value.lower()}-{player_id.lower()}", policy, difficulty)


def parse_agent_spec(
    spec: str,
    player_ids: Sequence[str],
    policy: Callable[..., Any],
    default: str = DEFAULT_DIFFICULTY.value,
) -> dict[str, Any]:
    """Parse `SEAT=kind,SEAT=kind`; unnamed seats get `default`."""
    kinds: dict[str, str] = {}
    for part in spec.split(","):
        item = part.strip()
        if not item:
            continue
        if "=" not in item:
            raise ValueError(f"Invalid --agents entry: {item!r}. Expected player_id=agent_type.")
        player_id, kind = [chunk.strip() for chunk in item.split("=", 1)]
        if player_id not in player_ids:
            raise ValueError(f"Unknown player_id in --agents: {player_id!r}")
        kinds[player_id] = kind
    return {player_id: build_agent(kinds.get(player_id, default), player_id, policy) for player_id in player_ids}


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint for batch match execution."""
    parser = argparse.ArgumentParser(description="Run seeded AI-vs-AI arcade matches.")
    parser.add_argument("--game", default="tictactoe", choices=turn_based_names())
    parser.add_argument("--num-games", type=int, default=1)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--max-turns", type=int, default=500)
    parser.add_argument("--difficulty", type=str, default=DEFAULT_DIFFICULTY.value)
    parser.add_argument("--agents", type=str, default="")
    parser.add_argument("--round-robin", action="store_true", help="Pit EASY, NORMAL and HARD against each other.")
    parser.add_argument("--log-dir", type=str, default=None)
    parser.add_argument("--output", type=str, default=None)
    args = parser.parse_args(argv)

    entry = get_entry(args.game)
    game_factory = entry.game_factory()
    policy = entry.policy()
    seeds = [args.seed + offset for offset in range(args.num_games)]
    arena = Arena(runner=MatchRunner(RunnerConfig(max_turns=args.max_turns, event_log_dir=args.log_dir)))

    if args.round_robin:
        competitors = {
            tier.value: (lambda player_id, kind=tier.value: build_agent(kind, player_id, policy)) for tier in Difficulty
        }
        summary = arena.run_round_robin(game_factory=game_factory, competitors=competitors, seeds=seeds)
    else:
        sample = game_factory()
        player_ids = list(sample.player_ids(sample.new_game(seed=args.seed, config={})))
        default = Difficulty.parse(args.difficulty).value
        summary = arena.run_series(
            game_factory=game_factory,
            agents_factory=lambda _seed: parse_agent_spec(args.agents, player_ids, policy, default),
            seeds=seeds,
        )
    summary_dict = summary.to_dict()
    print(json_dumps(summary_dict, indent=2))

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json_dumps(summary_dict, indent=2), encoding="utf-8")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
