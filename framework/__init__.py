"""Framework exports for games, engines, agents, runners, and arena tooling."""

from .agents import PolicyAgent, RandomAgent
from .arcade import ArcadeEngine
from .cards import Card, Suit
from .difficulty import DEFAULT_DIFFICULTY, Difficulty
from .engine import GameEngine
from .errors import AgentExecutionError, AgentTimeoutError, ArcadeError, IllegalMoveError, MatchConfigurationError
from .events import EventType, MatchEvent
from .game import Game, LegalMovesSpec, PlayerId
from .move import Move
from .observation import Observation
from .player import Agent
from .registry import GAMES, GameEntry, get_entry
from .result import MatchResult, TerminationReason
from .runner import MatchRun, MatchRunner, RunnerConfig
from .state import State

__all__ = [
    "DEFAULT_DIFFICULTY",
    "GAMES",
    "Agent",
    "AgentExecutionError",
    "AgentTimeoutError",
    "ArcadeEngine",
    "ArcadeError",
    "Card",
    "Difficulty",
    "EventType",
    "Game",
    "GameEngine",
    "GameEntry",
    "IllegalMoveError",
    "LegalMovesSpec",
    "MatchConfigurationError",
    "MatchEvent",
    "MatchResult",
    "MatchRun",
    "MatchRunner",
    "Move",
    "Observation",
    "PlayerId",
    "PolicyAgent",
    "RandomAgent",
    "RunnerConfig",
    "State",
    "Suit",
    "TerminationReason",
    "get_entry",
]
