import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///stonepaper.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Comma separated list, '*' allows any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Advisory countdown sent to clients once everyone is ready (seconds)
    COUNTDOWN_SECONDS = int(os.environ.get('COUNTDOWN_SECONDS', '10'))
    # Symbol played for a missing or unrecognised choice
    DEFAULT_CHOICE = os.environ.get('DEFAULT_CHOICE', 'stone')
    # Members required before a round can resolve
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '2'))
    # Room directory
    ROOM_KEY_LENGTH = int(os.environ.get('ROOM_KEY_LENGTH', '6'))
    PASSCODE_LENGTH = int(os.environ.get('PASSCODE_LENGTH', '6'))
    ROOM_TTL_MINUTES = int(os.environ.get('ROOM_TTL_MINUTES', '120'))
    # Match history listing
    HISTORY_PAGE_SIZE = int(os.environ.get('HISTORY_PAGE_SIZE', '20'))
    # Outcome emails. Sending is skipped while SMTP_HOST or SMTP_FROM is empty.
    SMTP_HOST = os.environ.get('SMTP_HOST', '')
    SMTP_PORT = int(os.environ.get('SMTP_PORT', '587'))
    SMTP_USER = os.environ.get('SMTP_USER', '')
    SMTP_PASS = os.environ.get('SMTP_PASS', '')
    SMTP_FROM = os.environ.get('SMTP_FROM', '')
    SMTP_USE_SSL = os.environ.get('SMTP_USE_SSL', '0') == '1'
    SMTP_TIMEOUT_SECONDS = int(os.environ.get('SMTP_TIMEOUT_SECONDS', '10'))
