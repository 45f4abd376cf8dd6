from millionaire import db, bcrypt
from millionaire.services.games import hints, rules
from flask import current_app
from flask_login import UserMixin
import json


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    name = db.Column(db.String(64), nullable=True)
    password_hash = db.Column(db.String(256), nullable=False)
    balance = db.Column(db.Integer, default=0, nullable=False)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=rules.utcnow, nullable=False)
    games = db.relationship('Game', back_populates='user', order_by='Game.created_at.desc()')

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'name': self.name or self.username,
            'balance': self.balance,
        }


class Question(db.Model):
    __tablename__ = 'question'
    id = db.Column(db.Integer, primary_key=True)
    text = db.Column(db.Text, nullable=False)
    level = db.Column(db.Integer, nullable=False, index=True)
    # answer1 is always the correct one; GameQuestion shuffles them onto keys
    answer1 = db.Column(db.String(255), nullable=False)
    answer2 = db.Column(db.String(255), nullable=False)
    answer3 = db.Column(db.String(255), nullable=False)
    answer4 = db.Column(db.String(255), nullable=False)

    def answer(self, index):
        return getattr(self, f'answer{index}')


class GameQuestion(db.Model):
    __tablename__ = 'game_question'
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False, index=True)
    question_id = db.Column(db.Integer, db.ForeignKey('question.id'), nullable=False)
    # Each key holds the number (1..4) of the question answer shown under it
    a = db.Column(db.Integer, nullable=False)
    b = db.Column(db.Integer, nullable=False)
    c = db.Column(db.Integer, nullable=False)
    d = db.Column(db.Integer, nullable=False)
    help_hash_json = db.Column(db.Text, nullable=False, default='{}')  # JSON-encoded {hint kind: payload}

    game = db.relationship('Game', back_populates='game_questions')
    question = db.relationship('Question')

    @property
    def level(self):
        return self.question.level

    @property
    def text(self):
        return self.question.text

    @property
    def variants(self):
        return {key: self.question.answer(getattr(self, key)) for key in rules.ANSWER_KEYS}

    @property
    def correct_answer_key(self):
        return next(key for key in rules.ANSWER_KEYS if getattr(self, key) == 1)

    @property
    def correct_answer(self):
        return self.variants[self.correct_answer_key]

    def answer_correct(self, letter):
        return str(letter or '').strip().lower() == self.correct_answer_key

    @property
    def help_hash(self):
        try:
            return json.loads(self.help_hash_json) if self.help_hash_json else {}
        except ValueError:
            current_app.logger.warning(
                f"[help-hash] game_question={self.id} unreadable help_hash {self.help_hash_json!r} treated as empty"
            )
            return {}

    @help_hash.setter
    def help_hash(self, value):
        self.help_hash_json = json.dumps(value)

    def add_help(self, help_type):
        """Compute the hint payload and record it for this question only."""
        keys = list(rules.ANSWER_KEYS)
        correct = self.correct_answer_key
        if help_type == 'fifty_fifty':
            payload = hints.fifty_fifty(keys, correct)
        elif help_type == 'audience_help':
            payload = hints.audience_distribution(keys, correct)
        elif help_type == 'friend_call':
            payload = hints.friend_call(keys, correct, accuracy=rules.friend_call_accuracy())
        else:
            raise ValueError(f'Unknown hint type: {help_type}')
        self.help_hash = {**self.help_hash, help_type: payload}
        return payload

    def to_dict(self):
        return {
            'id': self.id,
            'level': self.level,
            'text': self.text,
            'variants': self.variants,
            'help_hash': self.help_hash,
        }


class Game(db.Model):
    __tablename__ = 'game'
    # At most one unfinished game per user
    __table_args__ = (
        db.Index(
            'ux_game_user_in_progress', 'user_id', unique=True,
            sqlite_where=db.text('finished_at IS NULL'),
            postgresql_where=db.text('finished_at IS NULL'),
        ),
    )
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    current_level = db.Column(db.Integer, default=0, nullable=False)
    prize = db.Column(db.Integer, default=0, nullable=False)
    is_failed = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=rules.utcnow, nullable=False)
    finished_at = db.Column(db.DateTime, nullable=True)
    fifty_fifty_used = db.Column(db.Boolean, default=False, nullable=False)
    audience_help_used = db.Column(db.Boolean, default=False, nullable=False)
    friend_call_used = db.Column(db.Boolean, default=False, nullable=False)

    user = db.relationship('User', back_populates='games')
    game_questions = db.relationship(
        'GameQuestion',
        back_populates='game',
        order_by='GameQuestion.id',
        cascade='all, delete-orphan',
    )

    @property
    def finished(self):
        return self.finished_at is not None

    @property
    def previous_level(self):
        return self.current_level - 1

    def _question_at(self, level):
        return next((gq for gq in self.game_questions if gq.level == level), None)

    @property
    def current_game_question(self):
        return self._question_at(self.current_level)

    @property
    def previous_game_question(self):
        return self._question_at(self.previous_level)

    @property
    def guaranteed_prize(self):
        """Checkpoint prize kept whatever happens after the last correct answer."""
        return rules.fireproof_prize(self.previous_level)

    def timed_out(self, now):
        return now - self.created_at > rules.time_limit()

    @property
    def status(self):
        """Resolve in_progress, won, timeout, fail or money from current state."""
        if not self.finished:
            return 'in_progress'
        if self.current_level > rules.MAX_LEVEL:
            return 'won'
        if self.is_failed:
            if self.finished_at - self.created_at > rules.time_limit():
                return 'timeout'
            return 'fail'
        return 'money'

    def to_dict(self, include_question=True):
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'status': self.status,
            'finished': self.finished,
            'current_level': self.current_level,
            'previous_level': self.previous_level,
            'prize': self.prize,
            'guaranteed_prize': self.guaranteed_prize,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'finished_at': self.finished_at.isoformat() if self.finished_at else None,
            'fifty_fifty_used': self.fifty_fifty_used,
            'audience_help_used': self.audience_help_used,
            'friend_call_used': self.friend_call_used,
        }
        if include_question:
            gq = None if self.finished else self.current_game_question
            data['current_question'] = gq.to_dict() if gq else None
        return data
