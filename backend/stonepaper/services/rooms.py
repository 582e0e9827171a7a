import secrets
import string
from typing import Dict, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from stonepaper import bcrypt, db
from stonepaper.models import RoomRecord, generate_room_key
from .errors import RoomDirectoryError


def _generate_passcode(length: int) -> str:
    return ''.join(secrets.choice(string.digits) for _ in range(length))


def create_room(name: str, email: str = '') -> Dict[str, str]:
    """Register a room and hand back its key with the one-time plain passcode.

    Only the bcrypt hash of the passcode is stored.
    """
    cfg = current_app.config
    passcode = _generate_passcode(int(cfg.get('PASSCODE_LENGTH', 6)))
    record = RoomRecord(
        room_key=generate_room_key(int(cfg.get('ROOM_KEY_LENGTH', 6))),
        passcode_hash=bcrypt.generate_password_hash(passcode).decode('utf-8'),
        owner_name=name,
        owner_email=email or None,
        ttl_minutes=int(cfg.get('ROOM_TTL_MINUTES', 120)),
    )
    try:
        db.session.add(record)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise RoomDirectoryError(f"could not create room: {exc}") from exc
    current_app.logger.info(f"[room-created] room={record.room_key} owner={name}")
    return {'roomKey': record.room_key, 'passcode': passcode}


def get_room(room_key: str) -> Optional[RoomRecord]:
    return RoomRecord.query.filter_by(room_key=room_key).first()


def verify_room(room_key: str, passcode: str) -> bool:
    record = get_room(room_key)
    if not record or not passcode:
        return False
    if record.is_expired():
        current_app.logger.info(f"[room-expired] room={room_key}")
        return False
    return bcrypt.check_password_hash(record.passcode_hash, passcode)
