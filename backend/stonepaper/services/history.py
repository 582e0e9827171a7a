from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from stonepaper import db
from stonepaper.models import MatchPlayer, MatchRecord
from .errors import HistoryWriteError


def record_match(players: Iterable[Dict[str, Any]], winner_name: Optional[str], reason: str, rounds: int,
                 room_key: Optional[str] = None) -> MatchRecord:
    """Persist a completed match.

    `players` are dicts with name, email and score, in seat order.
    """
    match = MatchRecord(room_key=room_key, winner_name=winner_name, reason=reason, rounds=int(rounds or 0))
    for position, p in enumerate(players):
        match.players.append(MatchPlayer(
            position=position,
            name=p.get('name') or 'Player',
            email=p.get('email') or None,
            score=int(p.get('score') or 0),
        ))
    try:
        db.session.add(match)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise HistoryWriteError(f"could not record match: {exc}") from exc
    return match


def recent_matches(limit: int = 20) -> List[MatchRecord]:
    return MatchRecord.query.order_by(MatchRecord.id.desc()).limit(limit).all()
