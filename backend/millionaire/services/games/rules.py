from datetime import datetime, timedelta, timezone

from flask import current_app, has_app_context

QUESTION_LEVELS = tuple(range(15))
MAX_LEVEL = max(QUESTION_LEVELS)

PRIZES = (
    100, 200, 300, 500, 1000,
    2000, 4000, 8000, 16000, 32000,
    64000, 125000, 250000, 500000, 1000000,
)
JACKPOT = 1000000

# Passing one of these levels guarantees its prize even if the game is lost later
FIREPROOF_LEVELS = (4, 9, 14)

DEFAULT_TIME_LIMIT_SEC = 35 * 60

HELP_TYPES = ('fifty_fifty', 'audience_help', 'friend_call')
ANSWER_KEYS = ('a', 'b', 'c', 'd')


def utcnow() -> datetime:
    """Naive UTC timestamp, comparable with values read back from the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def time_limit() -> timedelta:
    seconds = DEFAULT_TIME_LIMIT_SEC
    if has_app_context():
        seconds = int(current_app.config.get('GAME_TIME_LIMIT_SEC', DEFAULT_TIME_LIMIT_SEC))
    return timedelta(seconds=seconds)


def prize_for_level(level: int) -> int:
    """Money for having answered the question at `level`; 0 below level 0."""
    if level < 0:
        return 0
    return PRIZES[min(level, MAX_LEVEL)]


def fireproof_prize(answered_level: int) -> int:
    """Highest checkpoint prize secured once `answered_level` was answered."""
    secured = [lvl for lvl in FIREPROOF_LEVELS if lvl <= answered_level]
    return PRIZES[secured[-1]] if secured else 0


def friend_call_accuracy() -> int:
    if has_app_context():
        return int(current_app.config.get('FRIEND_CALL_ACCURACY', 80))
    return 80
