"""Baseline agent implementations."""

from .policy_agent import Policy, PolicyAgent
from .random_agent import RandomAgent

__all__ = [
    "Policy",
    "PolicyAgent",
    "RandomAgent",
]
