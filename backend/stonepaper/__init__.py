from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
import os
from config import Config

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'migrations')

db = SQLAlchemy()
bcrypt = Bcrypt()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def _cors_origins(raw):
    if not raw or raw.strip() == '*':
        return '*'
    return [o.strip() for o in raw.split(',') if o.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))
    allowed_origins = _cors_origins(flask_app.config.get('CORS_ORIGINS', '*'))

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    migrate.init_app(flask_app, db, directory=MIGRATIONS_DIR)
    CORS(flask_app, resources={r"/api/*": {"origins": allowed_origins}})

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One engine (and one set of live rooms) per app
    from stonepaper.services.match import MatchEngine, RoomRegistry
    flask_app.extensions['match_engine'] = MatchEngine(
        RoomRegistry(),
        countdown_seconds=int(flask_app.config.get('COUNTDOWN_SECONDS', 10)),
        default_choice=flask_app.config.get('DEFAULT_CHOICE', 'stone'),
        min_players=int(flask_app.config.get('MIN_PLAYERS', 2)),
    )

    from stonepaper.main import main
    flask_app.register_blueprint(main)

    from stonepaper.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    from stonepaper.api.matches import matches
    flask_app.register_blueprint(matches, url_prefix='/api/matches')

    from stonepaper.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database tables."""
        import stonepaper.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
