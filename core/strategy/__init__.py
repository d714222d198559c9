"""Basic strategy tables and table rules."""

from core.strategy.rules import RuleSet
from core.strategy.basic import (
    Action,
    Feedback,
    Recommendation,
    StrategyOptions,
    TableType,
    critique,
    recommend,
)

__all__ = [
    "RuleSet",
    "Action",
    "Feedback",
    "Recommendation",
    "StrategyOptions",
    "TableType",
    "critique",
    "recommend",
]
