import smtplib
import ssl
from email.message import EmailMessage
from typing import Any, Dict

from flask import current_app

from .errors import NotificationError

REASON_TEXT = {
    'leave': 'your opponent left the match',
}


def build_outcome_body(player: Dict[str, Any], opponent: Dict[str, Any], score: int, opponent_score: int,
                       rounds: int, reason: str) -> str:
    if score > opponent_score:
        verdict = 'You won'
    elif score < opponent_score:
        verdict = 'You lost'
    else:
        verdict = 'It ended level'
    return (
        f"Hi {player.get('name') or 'Player'},\n\n"
        f"{verdict} against {opponent.get('name') or 'Player'}: {score} - {opponent_score} "
        f"after {rounds} round(s).\n"
        f"The match ended because {REASON_TEXT.get(reason, reason)}.\n"
    )


def _smtp_configured(cfg) -> bool:
    return bool(cfg.get('SMTP_HOST') and cfg.get('SMTP_FROM'))


def _send(cfg, msg: EmailMessage) -> None:
    host = cfg.get('SMTP_HOST')
    port = int(cfg.get('SMTP_PORT', 587))
    timeout = int(cfg.get('SMTP_TIMEOUT_SECONDS', 10))
    user = cfg.get('SMTP_USER')
    password = cfg.get('SMTP_PASS')
    if cfg.get('SMTP_USE_SSL'):
        with smtplib.SMTP_SSL(host, port, context=ssl.create_default_context(), timeout=timeout) as server:
            if user:
                server.login(user, password)
            server.send_message(msg)
    else:
        with smtplib.SMTP(host, port, timeout=timeout) as server:
            server.starttls(context=ssl.create_default_context())
            if user:
                server.login(user, password)
            server.send_message(msg)


def notify_outcome(player_a: Dict[str, Any], player_b: Dict[str, Any], score_a: int, score_b: int,
                   rounds: int, reason: str) -> int:
    """Email both participants the final score. Returns the number of emails sent."""
    cfg = current_app.config
    if not _smtp_configured(cfg):
        current_app.logger.info("[notify-skip] SMTP is not configured")
        return 0

    sent = 0
    failed = []
    for player, opponent, score, opponent_score in (
        (player_a, player_b, score_a, score_b),
        (player_b, player_a, score_b, score_a),
    ):
        address = player.get('email')
        if not address:
            continue
        msg = EmailMessage()
        msg['Subject'] = 'Your stone paper scissor match result'
        msg['From'] = cfg.get('SMTP_FROM')
        msg['To'] = address
        msg.set_content(build_outcome_body(player, opponent, score, opponent_score, rounds, reason))
        try:
            _send(cfg, msg)
        except (smtplib.SMTPException, OSError):
            current_app.logger.exception(f"[notify-failed] to={address}")
            failed.append(address)
            continue
        sent += 1
    # Only an outright failure is an error, a partial delivery counts as sent
    if failed and not sent:
        raise NotificationError(f"could not email {', '.join(failed)}")
    return sent
