from stonepaper import socketio
from . import history, notifications
from .match import MatchOutcome


def dispatch_outcome(app, outcome: MatchOutcome) -> None:
    """Hand a committed match outcome to history and email, best effort.

    The room state is already final when this is called. Each collaborator
    runs in its own failure handler; failures are logged and never retried.
    Runs inline in TESTING mode, otherwise as a Socket.IO background task.
    """
    players = [p.to_dict() for p in outcome.players]

    def _worker():
        with app.app_context():
            try:
                match = history.record_match(players, outcome.winner_name, outcome.history_reason,
                                             outcome.rounds, room_key=outcome.room_key)
                app.logger.info(f"[history] room={outcome.room_key} match={match.id} winner={outcome.winner_name}")
            except Exception:
                app.logger.exception(f"[history-failed] room={outcome.room_key}")

            a, b = players
            try:
                sent = notifications.notify_outcome(a, b, a['score'], b['score'], outcome.rounds, outcome.reason)
                app.logger.info(f"[notify] room={outcome.room_key} sent={sent}")
            except Exception:
                app.logger.exception(f"[notify-failed] room={outcome.room_key}")

    if app.config.get('TESTING'):
        _worker()
    else:
        socketio.start_background_task(_worker)
