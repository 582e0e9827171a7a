from stonepaper.models import MatchRecord


def _events(sio_client, name):
    return [pkt['args'][0] if pkt['args'] else None for pkt in sio_client.get_received() if pkt['name'] == name]


def _join(sio_client, room, name, email=''):
    sio_client.emit('join-room', {'roomId': room, 'name': name, 'email': email})


def _pair(make_sio_client, room='abcd'):
    ann, bo = make_sio_client(), make_sio_client()
    _join(ann, room, 'Ann', 'ann@example.com')
    _join(bo, room, 'Bo', 'bo@example.com')
    ann.get_received()
    bo.get_received()
    return ann, bo


def _round(ann, bo, room, c1, c2):
    ann.emit('player-ready', {'roomId': room})
    bo.emit('player-ready', {'roomId': room})
    ann.emit('player-choice', {'roomId': room, 'choice': c1})
    bo.emit('player-choice', {'roomId': room, 'choice': c2})


def test_join_without_room_gets_no_room(make_sio_client):
    sio_client = make_sio_client()
    sio_client.get_received()
    sio_client.emit('join-room', {'name': 'Ann'})
    received = sio_client.get_received()
    assert any(pkt['name'] == 'no-room' for pkt in received)


def test_join_broadcasts_player_list(make_sio_client):
    ann, bo = make_sio_client(), make_sio_client()
    _join(ann, 'abcd', 'Ann')
    _join(bo, 'abcd', 'Bo')
    updates = _events(ann, 'update-players')
    assert updates
    assert [p['name'] for p in updates[-1]['players']] == ['Ann', 'Bo']
    assert all(p['ready'] is False and p['score'] == 0 for p in updates[-1]['players'])


def test_ready_countdown_and_round_result(make_sio_client):
    ann, bo = _pair(make_sio_client)

    ann.emit('player-ready', {'roomId': 'abcd'})
    assert _events(bo, 'start-countdown') == []
    bo.emit('player-ready', {'roomId': 'abcd'})
    assert _events(ann, 'start-countdown') == [{'seconds': 10}]

    ann.emit('player-choice', {'roomId': 'abcd', 'choice': 'paper'})
    bo.emit('player-choice', {'roomId': 'abcd', 'choice': 'stone'})
    received = ann.get_received()
    results = [pkt['args'][0] for pkt in received if pkt['name'] == 'round-result']
    assert len(results) == 1
    result = results[0]
    assert result['winnerName'] == 'Ann'
    assert result['draw'] is False
    assert result['round'] == 1
    assert sorted(result['scores'].values()) == [0, 1]
    assert sorted(result['choices'].values()) == ['paper', 'stone']

    # Players are unready again after the round
    updates = [pkt['args'][0] for pkt in received if pkt['name'] == 'update-players']
    assert all(p['ready'] is False for p in updates[-1]['players'])


def test_emoji_is_rebroadcast(make_sio_client):
    ann, bo = _pair(make_sio_client)
    ann.emit('send_emoji', {'roomId': 'abcd', 'emoji': 'wave'})
    emojis = _events(bo, 'receive-emoji')
    assert len(emojis) == 1
    assert emojis[0]['name'] == 'Ann'
    assert emojis[0]['emoji'] == 'wave'


def test_events_for_unknown_room_are_ignored(make_sio_client):
    sio_client = make_sio_client()
    sio_client.get_received()
    sio_client.emit('player-ready', {'roomId': 'ghost'})
    sio_client.emit('player-choice', {'roomId': 'ghost', 'choice': 'paper'})
    assert sio_client.get_received() == []


def test_forfeit_records_once_and_deletes_room(flask_app, make_sio_client, monkeypatch):
    sent = []

    def fake_notify(player_a, player_b, score_a, score_b, rounds, reason):
        sent.append((player_a['name'], player_b['name'], score_a, score_b, rounds, reason))
        return 2

    monkeypatch.setattr('stonepaper.services.notifications.notify_outcome', fake_notify)
    engine = flask_app.extensions['match_engine']

    ann, bo = _pair(make_sio_client)
    _round(ann, bo, 'abcd', 'paper', 'stone')
    _round(ann, bo, 'abcd', 'stone', 'paper')
    bo.get_received()

    ann.disconnect()
    left = _events(bo, 'player-left')
    assert len(left) == 1
    assert left[0]['name'] == 'Ann'
    assert engine.registry.get('abcd').finished is True

    records = MatchRecord.query.all()
    assert len(records) == 1
    match = records[0]
    assert match.winner_name == 'Bo'
    assert match.reason == 'Player left'
    assert match.rounds == 2
    assert [(p.name, p.score) for p in match.players] == [('Ann', 1), ('Bo', 1)]
    assert sent == [('Ann', 'Bo', 1, 1, 2, 'leave')]

    bo.disconnect()
    assert MatchRecord.query.count() == 1
    assert len(sent) == 1
    assert 'abcd' not in engine.registry


def test_collaborator_failure_does_not_touch_room_state(flask_app, make_sio_client, monkeypatch):
    def broken_record(*args, **kwargs):
        raise RuntimeError('database is down')

    sent = []
    monkeypatch.setattr('stonepaper.services.history.record_match', broken_record)
    monkeypatch.setattr('stonepaper.services.notifications.notify_outcome',
                        lambda *args: sent.append(args) or 0)
    engine = flask_app.extensions['match_engine']

    ann, bo = _pair(make_sio_client)
    ann.disconnect()

    room = engine.registry.get('abcd')
    assert room.finished is True
    assert len(room.players) == 1
    assert len(sent) == 1
    assert MatchRecord.query.count() == 0
