"""Match session engine: rooms, readiness, rounds and forfeits.

Pure in-memory state machine. Socket handlers feed it inbound events and
emit whatever events it hands back; persistence and email happen elsewhere
once a match outcome has been committed here.
"""

from .engine import Event, MatchEngine
from .forfeit import MatchOutcome, ParticipantResult
from .registry import Room, RoomRegistry

__all__ = ['Event', 'MatchEngine', 'MatchOutcome', 'ParticipantResult', 'Room', 'RoomRegistry']
