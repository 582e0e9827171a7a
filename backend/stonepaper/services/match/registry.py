from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional


@dataclass
class Room:
    key: str
    # Join order matters: the first two entries are the match participants
    players: List[str] = field(default_factory=list)
    names: Dict[str, str] = field(default_factory=dict)
    emails: Dict[str, str] = field(default_factory=dict)
    ready: Dict[str, bool] = field(default_factory=dict)
    choices: Dict[str, Optional[str]] = field(default_factory=dict)
    scores: Dict[str, int] = field(default_factory=dict)
    rounds: int = 0
    finished: bool = False

    def has_player(self, identity: str) -> bool:
        return identity in self.players

    def participants(self) -> List[str]:
        return self.players[:2]

    def all_ready(self) -> bool:
        return bool(self.players) and all(self.ready.get(pid, False) for pid in self.players)

    def all_chosen(self) -> bool:
        return len(self.choices) == len(self.players)

    def reset_round(self) -> None:
        self.choices = {}
        self.ready = {pid: False for pid in self.players}

    def purge(self, identity: str) -> None:
        if identity in self.players:
            self.players.remove(identity)
        for mapping in (self.names, self.emails, self.ready, self.choices, self.scores):
            mapping.pop(identity, None)


class RoomRegistry:
    """In-memory rooms for one server process, keyed by room key.

    Owned by the engine instance rather than the module, so every app (and
    every test) gets its own set of rooms.
    """

    def __init__(self) -> None:
        self._rooms: Dict[str, Room] = {}

    def get(self, room_key: str) -> Optional[Room]:
        return self._rooms.get(room_key)

    def get_or_create(self, room_key: str) -> Room:
        room = self._rooms.get(room_key)
        if room is None:
            room = Room(key=room_key)
            self._rooms[room_key] = room
        return room

    def delete(self, room_key: str) -> bool:
        return self._rooms.pop(room_key, None) is not None

    def rooms_for(self, identity: str) -> List[Room]:
        return [room for room in self._rooms.values() if room.has_player(identity)]

    def __contains__(self, room_key: str) -> bool:
        return room_key in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    def __iter__(self) -> Iterator[Room]:
        return iter(list(self._rooms.values()))
