"""Demo data for `flask db-reset`."""
import random

from millionaire import db
from millionaire.models import Question, User
from millionaire.services.games.rules import QUESTION_LEVELS


def seed_users(usernames, password='password'):
    for username in usernames:
        user = User(username=username, name=username)
        user.set_password(password)
        db.session.add(user)
    db.session.commit()


def _arithmetic_question(level, rng):
    # Operands grow with the level so later questions are harder to do in your head
    high = 10 * (level + 1) ** 2
    x, y = rng.randint(2, high), rng.randint(2, high)
    right = x + y
    wrong = rng.sample([right + d for d in range(-9, 10) if d and right + d > 0], 3)
    return Question(
        text=f'How much is {x} + {y}?',
        level=level,
        answer1=str(right),
        answer2=str(wrong[0]),
        answer3=str(wrong[1]),
        answer4=str(wrong[2]),
    )


def seed_questions(per_level=4, rng=random):
    """Add `per_level` questions on every level and return how many were created."""
    count = 0
    for level in QUESTION_LEVELS:
        for _ in range(per_level):
            db.session.add(_arithmetic_question(level, rng))
            count += 1
    db.session.commit()
    return count
