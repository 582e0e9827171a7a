from flask_socketio import join_room, emit
from flask import current_app, request
import random

from stonepaper import socketio
from stonepaper.services.dispatch import dispatch_outcome

NAMESPACE = '/'


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _engine():
    return current_app.extensions['match_engine']


def _room_key(data) -> str:
    return str((data or {}).get('roomId') or '').strip()


def _emit_all(events) -> None:
    for event in events:
        socketio.emit(event.name, event.payload, to=event.room, namespace=NAMESPACE)


def handle_join_room(data):
    room_key = _room_key(data)
    if not room_key:
        emit('no-room')
        return
    name = str((data or {}).get('name') or '').strip() or f"Player{random.randint(0, 998)}"
    email = str((data or {}).get('email') or '').strip()
    sid = _get_sid()
    join_room(room_key)
    events = _engine().join(room_key, sid, name, email)
    current_app.logger.info(f"[join] room={room_key} sid={sid} name={name}")
    _emit_all(events)


def handle_player_ready(data):
    room_key = _room_key(data)
    events = _engine().set_ready(room_key, _get_sid(), True)
    if any(e.name == 'start-countdown' for e in events):
        current_app.logger.info(f"[countdown] room={room_key}")
    _emit_all(events)


def handle_player_unready(data):
    _emit_all(_engine().set_ready(_room_key(data), _get_sid(), False))


def handle_player_choice(data):
    room_key = _room_key(data)
    events = _engine().submit_choice(room_key, _get_sid(), (data or {}).get('choice'))
    for event in events:
        if event.name == 'round-result':
            current_app.logger.info(
                f"[round] room={room_key} round={event.payload['round']} winner={event.payload['winnerName']}"
            )
    _emit_all(events)


def handle_send_emoji(data):
    _emit_all(_engine().emoji(_room_key(data), _get_sid(), (data or {}).get('emoji')))


def handle_disconnect(reason=None):
    sid = _get_sid()
    engine = _engine()
    rooms_before = {room.key for room in engine.registry.rooms_for(sid)}
    # State is committed by leave(); collaborators only see the outcome afterwards
    events, outcomes = engine.leave(sid)
    _emit_all(events)
    app = current_app._get_current_object()
    for outcome in outcomes:
        current_app.logger.info(
            f"[forfeit] room={outcome.room_key} winner={outcome.winner_name} rounds={outcome.rounds}"
        )
        dispatch_outcome(app, outcome)
    for key in rooms_before:
        if key not in engine.registry:
            current_app.logger.info(f"[room-deleted] room={key}")
    current_app.logger.info(f"[leave] sid={sid} rooms={sorted(rooms_before)}")


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on the default namespace."""
    socketio.on_event('join-room', handle_join_room, namespace=NAMESPACE)
    socketio.on_event('player-ready', handle_player_ready, namespace=NAMESPACE)
    socketio.on_event('player-unready', handle_player_unready, namespace=NAMESPACE)
    socketio.on_event('player-choice', handle_player_choice, namespace=NAMESPACE)
    socketio.on_event('send_emoji', handle_send_emoji, namespace=NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=NAMESPACE)
