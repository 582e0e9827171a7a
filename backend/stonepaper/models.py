from stonepaper import db
from datetime import datetime, timedelta, timezone
import string
import secrets


def utc_now():
    # Naive UTC, sqlite drops tzinfo on the way back
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_room_key(length=6):
    """Generate a unique, short room key."""
    alphabet = string.ascii_lowercase + string.digits
    while True:
        key = ''.join(secrets.choice(alphabet) for _ in range(length))
        if not RoomRecord.query.filter_by(room_key=key).first():
            return key


class RoomRecord(db.Model):
    __tablename__ = 'room'
    id = db.Column(db.Integer, primary_key=True)
    room_key = db.Column(db.String(32), unique=True, nullable=False, index=True)
    passcode_hash = db.Column(db.String(128), nullable=False)
    owner_name = db.Column(db.String(64), nullable=False)
    owner_email = db.Column(db.String(254), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utc_now)
    expires_at = db.Column(db.DateTime, nullable=False)

    def __init__(self, ttl_minutes=120, **kwargs):
        super(RoomRecord, self).__init__(**kwargs)
        if not self.created_at:
            self.created_at = utc_now()
        if not self.expires_at:
            self.expires_at = self.created_at + timedelta(minutes=ttl_minutes)

    def is_expired(self, now=None):
        return (now or utc_now()) >= self.expires_at

    def to_dict(self):
        # Never expose the passcode hash
        return {
            'room_key': self.room_key,
            'owner_name': self.owner_name,
            'created_at': self.created_at.isoformat(),
            'expires_at': self.expires_at.isoformat(),
            'expired': self.is_expired(),
        }


class MatchRecord(db.Model):
    __tablename__ = 'match'
    id = db.Column(db.Integer, primary_key=True)
    room_key = db.Column(db.String(32), nullable=True, index=True)
    winner_name = db.Column(db.String(64), nullable=True)
    reason = db.Column(db.String(64), nullable=False)
    rounds = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=utc_now)
    players = db.relationship('MatchPlayer', back_populates='match', order_by='MatchPlayer.position',
                              cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'room_key': self.room_key,
            'winner': self.winner_name,
            'reason': self.reason,
            'rounds': self.rounds,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'players': [p.to_dict() for p in self.players],
        }


class MatchPlayer(db.Model):
    __tablename__ = 'match_player'
    id = db.Column(db.Integer, primary_key=True)
    match_id = db.Column(db.Integer, db.ForeignKey('match.id'), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=0)
    name = db.Column(db.String(64), nullable=False)
    email = db.Column(db.String(254), nullable=True)
    score = db.Column(db.Integer, default=0)
    match = db.relationship('MatchRecord', back_populates='players')

    def to_dict(self):
        return {
            'name': self.name,
            'score': self.score,
        }
