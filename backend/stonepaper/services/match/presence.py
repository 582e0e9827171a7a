from typing import Any, Dict, List, Optional

from .registry import Room

DEFAULT_PLAYER_NAME = 'Player'


def player_snapshot(room: Optional[Room]) -> List[Dict[str, Any]]:
    """Ordered membership view sent with every `update-players` event."""
    if room is None:
        return []
    return [
        {
            'id': pid,
            'name': room.names.get(pid, DEFAULT_PLAYER_NAME),
            'ready': room.ready.get(pid, False),
            'score': room.scores.get(pid, 0),
        }
        for pid in room.players
    ]
