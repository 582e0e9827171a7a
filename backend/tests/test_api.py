from datetime import timedelta

from stonepaper import db
from stonepaper.models import RoomRecord
from stonepaper.services.history import record_match


def test_index_and_health(client):
    assert client.get('/').status_code == 200
    res = client.get('/api/health')
    assert res.status_code == 200
    assert res.get_json() == {'status': 'ok', 'rooms': 0}


def test_create_room(client):
    res = client.post('/api/rooms', json={'name': 'Ann', 'email': 'ann@example.com'})
    assert res.status_code == 201
    data = res.get_json()
    assert len(data['roomKey']) == 6
    assert len(data['passcode']) == 6 and data['passcode'].isdigit()


def test_create_room_requires_name(client):
    res = client.post('/api/rooms', json={'email': 'ann@example.com'})
    assert res.status_code == 400


def test_passcode_is_stored_hashed(client):
    data = client.post('/api/rooms', json={'name': 'Ann'}).get_json()
    record = RoomRecord.query.filter_by(room_key=data['roomKey']).first()
    assert record is not None
    assert record.passcode_hash != data['passcode']
    assert 'passcode_hash' not in record.to_dict()


def test_verify_room(client):
    data = client.post('/api/rooms', json={'name': 'Ann'}).get_json()
    ok = client.post('/api/rooms/verify', json={'roomKey': data['roomKey'], 'passcode': data['passcode']})
    assert ok.status_code == 200
    assert ok.get_json() == {'ok': True}

    wrong_code = '0' * 6 if data['passcode'] != '0' * 6 else '1' * 6
    bad = client.post('/api/rooms/verify', json={'roomKey': data['roomKey'], 'passcode': wrong_code})
    assert bad.status_code == 403
    assert bad.get_json() == {'ok': False}

    unknown = client.post('/api/rooms/verify', json={'roomKey': 'zzzzzz', 'passcode': data['passcode']})
    assert unknown.get_json() == {'ok': False}

    missing = client.post('/api/rooms/verify', json={'roomKey': data['roomKey']})
    assert missing.status_code == 400


def test_expired_room_fails_verification(client):
    data = client.post('/api/rooms', json={'name': 'Ann'}).get_json()
    record = RoomRecord.query.filter_by(room_key=data['roomKey']).first()
    record.expires_at = record.created_at - timedelta(minutes=1)
    db.session.commit()
    res = client.post('/api/rooms/verify', json={'roomKey': data['roomKey'], 'passcode': data['passcode']})
    assert res.get_json() == {'ok': False}
    assert client.get(f"/api/rooms/{data['roomKey']}").get_json()['expired'] is True


def test_get_room(client):
    data = client.post('/api/rooms', json={'name': 'Ann'}).get_json()
    res = client.get(f"/api/rooms/{data['roomKey']}")
    assert res.status_code == 200
    assert res.get_json()['owner_name'] == 'Ann'
    assert client.get('/api/rooms/nope').status_code == 404


def test_match_history_listing(client):
    players = [{'name': 'Ann', 'email': 'ann@example.com', 'score': 2},
               {'name': 'Bo', 'email': 'bo@example.com', 'score': 2}]
    record_match(players, 'Bo', 'Player left', 4, room_key='abcd')
    record_match(players, 'Ann', 'Player left', 1, room_key='efgh')

    res = client.get('/api/matches')
    assert res.status_code == 200
    matches = res.get_json()
    assert [m['room_key'] for m in matches] == ['efgh', 'abcd']
    assert matches[1]['winner'] == 'Bo'
    assert matches[1]['rounds'] == 4
    assert matches[1]['players'] == [{'name': 'Ann', 'score': 2}, {'name': 'Bo', 'score': 2}]

    assert len(client.get('/api/matches?limit=1').get_json()) == 1
