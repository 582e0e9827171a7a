from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .presence import DEFAULT_PLAYER_NAME
from .registry import Room

# Reason carried to the notification service and stored on the outcome
FORFEIT_REASON = 'leave'
# Human readable reason written to match history
FORFEIT_HISTORY_REASON = 'Player left'
# On level scores the participant who stayed is declared the winner
TIE_GOES_TO_REMAINING = True


@dataclass
class ParticipantResult:
    identity: str
    name: str
    email: str
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'email': self.email, 'score': self.score}


@dataclass
class MatchOutcome:
    room_key: str
    players: List[ParticipantResult] = field(default_factory=list)
    winner_identity: Optional[str] = None
    winner_name: Optional[str] = None
    reason: str = FORFEIT_REASON
    history_reason: str = FORFEIT_HISTORY_REASON
    rounds: int = 0


def can_forfeit(room: Room, departing: str) -> bool:
    """A departure concludes the match only for one of two live participants."""
    if room.finished:
        return False
    participants = room.participants()
    return len(participants) == 2 and departing in participants


def decide_forfeit(room: Room, departing: str, tie_to_remaining: bool = TIE_GOES_TO_REMAINING) -> MatchOutcome:
    """Build the final outcome for a departure and mark the room finished.

    Must run before the departing identity is purged, its score and contact
    details are still read from the room.
    """
    results = [
        ParticipantResult(
            identity=pid,
            name=room.names.get(pid, DEFAULT_PLAYER_NAME),
            email=room.emails.get(pid, ''),
            score=room.scores.get(pid, 0),
        )
        for pid in room.participants()
    ]
    leaver = next(r for r in results if r.identity == departing)
    stayer = next(r for r in results if r.identity != departing)

    if leaver.score > stayer.score:
        winner = leaver
    elif stayer.score > leaver.score:
        winner = stayer
    else:
        winner = stayer if tie_to_remaining else None

    room.finished = True
    return MatchOutcome(
        room_key=room.key,
        players=results,
        winner_identity=winner.identity if winner else None,
        winner_name=winner.name if winner else None,
        rounds=room.rounds,
    )
