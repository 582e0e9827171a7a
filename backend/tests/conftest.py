import os
import sys
import pytest

# Ensure the backend root (containing the `stonepaper` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from stonepaper import create_app, db, socketio
from stonepaper.services.match import MatchEngine, RoomRegistry


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = '*'
    COUNTDOWN_SECONDS = 10
    DEFAULT_CHOICE = 'stone'
    MIN_PLAYERS = 2
    ROOM_KEY_LENGTH = 6
    PASSCODE_LENGTH = 6
    ROOM_TTL_MINUTES = 120
    HISTORY_PAGE_SIZE = 20
    SMTP_HOST = ''
    SMTP_FROM = ''


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import stonepaper.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def engine():
    return MatchEngine(RoomRegistry(), countdown_seconds=10)
