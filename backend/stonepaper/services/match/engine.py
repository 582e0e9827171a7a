from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .forfeit import MatchOutcome, can_forfeit, decide_forfeit
from .presence import DEFAULT_PLAYER_NAME, player_snapshot
from .registry import Room, RoomRegistry
from .rules import DEFAULT_CHOICE, Outcome, describe, effective_choice, normalize_choice, resolve

UPDATE_PLAYERS = 'update-players'
START_COUNTDOWN = 'start-countdown'
ROUND_RESULT = 'round-result'
PLAYER_LEFT = 'player-left'
RECEIVE_EMOJI = 'receive-emoji'


@dataclass
class Event:
    """An outbound message addressed to every member of `room`."""
    name: str
    payload: Dict[str, Any]
    room: str


class MatchEngine:
    """State machine for all live rooms of one process.

    Commands mutate room state and return the events the transport should
    emit; nothing here talks to sockets, the database or SMTP. Callers are
    expected to run one command at a time.
    """

    def __init__(self, registry: Optional[RoomRegistry] = None, countdown_seconds: int = 10,
                 default_choice: str = DEFAULT_CHOICE, min_players: int = 2):
        self.registry = registry if registry is not None else RoomRegistry()
        self.countdown_seconds = countdown_seconds
        self.default_choice = default_choice
        self.min_players = min_players

    # ---- queries ----

    def presence(self, room_key: str) -> List[Dict[str, Any]]:
        return player_snapshot(self.registry.get(room_key))

    def _presence_event(self, room: Room) -> Event:
        return Event(UPDATE_PLAYERS, {'players': player_snapshot(room)}, room.key)

    # ---- membership ----

    def join(self, room_key: str, identity: str, name: str, email: str = '') -> List[Event]:
        room = self.registry.get_or_create(room_key)
        if not room.has_player(identity):
            room.players.append(identity)
            room.names[identity] = name or DEFAULT_PLAYER_NAME
            room.emails[identity] = email or ''
            room.scores[identity] = 0
            room.ready[identity] = False
        return [self._presence_event(room)]

    def leave(self, identity: str) -> Tuple[List[Event], List[MatchOutcome]]:
        events: List[Event] = []
        outcomes: List[MatchOutcome] = []
        for room in self.registry.rooms_for(identity):
            if can_forfeit(room, identity):
                outcomes.append(decide_forfeit(room, identity))
            name = room.names.get(identity, DEFAULT_PLAYER_NAME)
            room.purge(identity)
            if not room.players:
                self.registry.delete(room.key)
                continue
            events.append(Event(PLAYER_LEFT, {'id': identity, 'name': name}, room.key))
            events.append(self._presence_event(room))
        return events, outcomes

    # ---- readiness ----

    def set_ready(self, room_key: str, identity: str, value: bool) -> List[Event]:
        room = self.registry.get(room_key)
        if room is None or not room.has_player(identity):
            return []
        room.ready[identity] = bool(value)
        events = [self._presence_event(room)]
        if value and not room.finished and room.all_ready():
            events.append(Event(START_COUNTDOWN, {'seconds': self.countdown_seconds}, room.key))
        return events

    # ---- rounds ----

    def submit_choice(self, room_key: str, identity: str, choice) -> List[Event]:
        room = self.registry.get(room_key)
        if room is None or room.finished or not room.has_player(identity):
            return []
        # Nobody to play against yet, nothing may carry into the first round
        if len(room.players) < self.min_players:
            return []
        room.choices[identity] = normalize_choice(choice)
        if not room.all_chosen():
            return []
        return [self._resolve_round(room), self._presence_event(room)]

    def _resolve_round(self, room: Room) -> Event:
        # Only the first two members are scored, however many have chosen
        p1, p2 = room.participants()
        c1 = effective_choice(room.choices.get(p1), self.default_choice)
        c2 = effective_choice(room.choices.get(p2), self.default_choice)
        n1 = room.names.get(p1, DEFAULT_PLAYER_NAME)
        n2 = room.names.get(p2, DEFAULT_PLAYER_NAME)

        outcome = resolve(c1, c2)
        winner_id = loser_id = winner_name = None
        if outcome is Outcome.FIRST:
            winner_id, loser_id, winner_name = p1, p2, n1
        elif outcome is Outcome.SECOND:
            winner_id, loser_id, winner_name = p2, p1, n2
        if winner_id is not None:
            room.scores[winner_id] = room.scores.get(winner_id, 0) + 1
        room.rounds += 1

        payload = {
            'text': describe(outcome, n1, n2, c1, c2),
            'winnerId': winner_id,
            'loserId': loser_id,
            'winnerName': winner_name,
            'draw': outcome is Outcome.DRAW,
            'choices': {p1: c1, p2: c2},
            'scores': {p1: room.scores.get(p1, 0), p2: room.scores.get(p2, 0)},
            'names': {p1: n1, p2: n2},
            'round': room.rounds,
        }
        room.reset_round()
        return Event(ROUND_RESULT, payload, room.key)

    # ---- chatter ----

    def emoji(self, room_key: str, identity: str, token) -> List[Event]:
        room = self.registry.get(room_key)
        if room is None:
            return []
        payload = {'id': identity, 'name': room.names.get(identity, DEFAULT_PLAYER_NAME), 'emoji': token}
        return [Event(RECEIVE_EMOJI, payload, room.key)]
