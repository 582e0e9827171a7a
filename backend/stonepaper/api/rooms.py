from flask import Blueprint, jsonify, request

from stonepaper.services.errors import RoomDirectoryError
from stonepaper.services.rooms import create_room as svc_create_room, get_room as svc_get_room, verify_room as svc_verify_room


rooms = Blueprint('rooms', __name__)


@rooms.route('', methods=['POST'])
def create_room():
    data = request.get_json(silent=True) or {}
    name = str(data.get('name') or '').strip()
    email = str(data.get('email') or '').strip()
    if not name:
        return jsonify({'error': 'Player name is required'}), 400
    try:
        created = svc_create_room(name, email)
    except RoomDirectoryError:
        return jsonify({'error': 'Could not create room'}), 500
    return jsonify(created), 201


@rooms.route('/verify', methods=['POST'])
def verify_room():
    data = request.get_json(silent=True) or {}
    room_key = str(data.get('roomKey') or '').strip()
    passcode = str(data.get('passcode') or '').strip()
    if not all([room_key, passcode]):
        return jsonify({'error': 'Room key and passcode are required'}), 400
    ok = svc_verify_room(room_key, passcode)
    return jsonify({'ok': ok}), 200 if ok else 403


@rooms.route('/<string:room_key>', methods=['GET'])
def get_room(room_key):
    record = svc_get_room(room_key)
    if not record:
        return jsonify({'error': 'Room not found'}), 404
    return jsonify(record.to_dict())
