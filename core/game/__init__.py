"""Round driver, phases and events."""

from core.game.events import EventEmitter, EventRecorder, EventType, GameEvent, MessageCategory
from core.game.state import Phase, RoundState, RoundSummary, RoundInvariantError
from core.game.engine import RoundStateMachine

__all__ = [
    "EventEmitter",
    "EventRecorder",
    "EventType",
    "GameEvent",
    "MessageCategory",
    "Phase",
    "RoundState",
    "RoundSummary",
    "RoundInvariantError",
    "RoundStateMachine",
]
