"""Game progression: creation, answers, cash-out and hints.

Every operation is a single read-modify-write transaction. Mutations are
committed together or rolled back together; callers serialize access to one
game (the API loads it with ``with_for_update``).
"""

import random

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from millionaire import db
from millionaire.models import Game, GameQuestion, User
from . import question_bank, rules
from .errors import (
    GameAlreadyFinished,
    GameAlreadyInProgress,
    HintAlreadyUsed,
    InsufficientQuestionBank,
    UnknownHintType,
)


def _commit() -> None:
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise


def _shuffled_game_question(question, rng) -> GameQuestion:
    numbers = [1, 2, 3, 4]
    rng.shuffle(numbers)
    a, b, c, d = numbers
    return GameQuestion(question=question, a=a, b=b, c=c, d=d, help_hash={})


def create_game_for_user(user, fetch_question=None, rng=random) -> Game:
    """Start a new game with one random question per level.

    Raises GameAlreadyInProgress when the user still has an unfinished game,
    and InsufficientQuestionBank when some level has no question left. In
    both cases nothing is written.
    """
    fetch_question = fetch_question or question_bank.fetch_question

    # Serializes concurrent creations for the same user
    User.query.filter_by(id=user.id).with_for_update().one()
    existing = Game.query.filter_by(user_id=user.id, finished_at=None).first()
    if existing:
        current_app.logger.info(f"[game-refused] user={user.id} game={existing.id} still in progress")
        raise GameAlreadyInProgress(existing)

    used_ids = set()
    game_questions = []
    for level in rules.QUESTION_LEVELS:
        question = fetch_question(level, exclude_ids=used_ids)
        if question is None:
            current_app.logger.warning(f"[game-refused] user={user.id} no question for level={level}")
            raise InsufficientQuestionBank(level)
        used_ids.add(question.id)
        game_questions.append(_shuffled_game_question(question, rng))

    game = Game(
        user_id=user.id,
        current_level=0,
        prize=0,
        is_failed=False,
        fifty_fifty_used=False,
        audience_help_used=False,
        friend_call_used=False,
        created_at=rules.utcnow(),
    )
    game.game_questions = game_questions
    db.session.add(game)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race against another creation; the unique index kept one game
        db.session.rollback()
        existing = Game.query.filter_by(user_id=user.id, finished_at=None).first()
        if existing is None:
            raise
        current_app.logger.info(f"[game-refused] user={user.id} game={existing.id} created concurrently")
        raise GameAlreadyInProgress(existing)
    except SQLAlchemyError:
        db.session.rollback()
        raise
    current_app.logger.info(f"[game-create] user={user.id} game={game.id}")
    return game


def _lose(game: Game, now) -> None:
    """Finish as failed; only the last checkpoint prize is kept."""
    game.is_failed = True
    game.finished_at = now
    game.prize = game.guaranteed_prize


def answer_current_question(game: Game, letter, now=None) -> bool:
    """Answer the question at the current level.

    Returns True on a correct answer. Returns False when the game is already
    over, when time ran out (the game is then lost) or on a wrong answer.
    """
    if game.finished:
        return False
    now = now or rules.utcnow()

    if game.timed_out(now):
        _lose(game, now)
        _commit()
        current_app.logger.info(f"[timeout] game={game.id} level={game.current_level}")
        return False

    game_question = game.current_game_question
    if game_question.answer_correct(letter):
        game.current_level += 1
        if game.current_level > rules.MAX_LEVEL:
            game.prize = rules.JACKPOT
            game.finished_at = now
        else:
            game.prize = rules.prize_for_level(game.previous_level)
        _commit()
        current_app.logger.info(
            f"[answer] game={game.id} correct level={game.current_level} prize={game.prize} status={game.status}"
        )
        return True

    _lose(game, now)
    _commit()
    current_app.logger.info(f"[answer] game={game.id} wrong letter={letter!r} level={game.current_level}")
    return False


def take_money(game: Game, now=None) -> Game:
    """Finish the game and credit the prize of the last completed level.

    Past the time limit the game is lost instead and nothing is credited.
    """
    if game.finished:
        raise GameAlreadyFinished()
    now = now or rules.utcnow()

    if game.timed_out(now):
        _lose(game, now)
        _commit()
        current_app.logger.info(f"[timeout] game={game.id} level={game.current_level} take-money refused")
        return game

    game.prize = rules.prize_for_level(game.previous_level)
    game.finished_at = now
    User.query.filter_by(id=game.user_id).update(
        {User.balance: User.balance + game.prize}, synchronize_session=False
    )
    _commit()
    current_app.logger.info(f"[take-money] game={game.id} user={game.user_id} prize={game.prize}")
    return game


def use_help(game: Game, help_type: str) -> Game:
    help_type = str(help_type or '')
    if help_type not in rules.HELP_TYPES:
        raise UnknownHintType(help_type)
    if game.finished:
        raise GameAlreadyFinished()
    flag = f'{help_type}_used'
    if getattr(game, flag):
        raise HintAlreadyUsed(help_type)

    setattr(game, flag, True)
    game.current_game_question.add_help(help_type)
    _commit()
    current_app.logger.info(f"[help] game={game.id} level={game.current_level} type={help_type}")
    return game
