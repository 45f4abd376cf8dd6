import os
import sys
import pytest

# Ensure the backend root (containing the `millionaire` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from millionaire import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    WTF_CSRF_ENABLED = False
    BCRYPT_LOG_ROUNDS = 4
    GAME_TIME_LIMIT_SEC = 35 * 60
    FRIEND_CALL_ACCURACY = 80


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import millionaire.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


def _make_user(username, password='password', **kwargs):
    from millionaire.models import User
    user = User(username=username, name=kwargs.pop('name', username), **kwargs)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture()
def make_user(flask_app):
    return _make_user


@pytest.fixture()
def user(flask_app):
    return _make_user('alex', name='Alex')


@pytest.fixture()
def generate_questions(flask_app):
    """Create `count` questions spread over levels 0..14 in order."""
    from millionaire.models import Question

    def _generate(count):
        questions = []
        for i in range(count):
            q = Question(
                text=f'In what year did the Universe begin? #{i}',
                level=i % 15,
                answer1=f'{2000 + i}',
                answer2=f'{2001 + i}',
                answer3=f'{2002 + i}',
                answer4=f'{2003 + i}',
            )
            db.session.add(q)
            questions.append(q)
        db.session.commit()
        return questions

    return _generate


@pytest.fixture()
def make_game(flask_app):
    """Build a game with 15 questions; the correct key is always 'd'."""
    from millionaire.models import Game, GameQuestion, Question
    from millionaire.services.games.rules import utcnow

    def _make(owner, **attrs):
        attrs.setdefault('created_at', utcnow())
        game = Game(user_id=owner.id, **attrs)
        for level in range(15):
            question = Question(
                text=f'Question of level {level}',
                level=level,
                answer1='right', answer2='wrong 2', answer3='wrong 3', answer4='wrong 4',
            )
            game.game_questions.append(GameQuestion(question=question, a=4, b=3, c=2, d=1))
        db.session.add(game)
        db.session.commit()
        return game

    return _make


@pytest.fixture()
def game_w_questions(user, make_game):
    return make_game(user)


@pytest.fixture()
def login(client):
    def _login(u, password='password'):
        res = client.post('/login', json={'username': u.username, 'password': password})
        assert res.status_code == 200
        return res
    return _login
