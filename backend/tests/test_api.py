from millionaire import db
from millionaire.models import Game, User


def test_create_game(client, user, login, generate_questions):
    generate_questions(15)
    login(user)

    res = client.post('/api/games')
    assert res.status_code == 201
    data = res.get_json()
    game = data['game']
    assert game['finished'] is False
    assert game['status'] == 'in_progress'
    assert game['user_id'] == user.id
    assert game['current_question']['level'] == 0
    assert set(game['current_question']['variants']) == {'a', 'b', 'c', 'd'}
    assert data['message']


def test_create_second_game_is_refused(client, user, login, game_w_questions, generate_questions):
    generate_questions(15)
    login(user)
    before = Game.query.count()

    res = client.post('/api/games')
    assert res.status_code == 409
    data = res.get_json()
    assert data['game_id'] == game_w_questions.id
    assert data['error']
    assert Game.query.count() == before


def test_create_game_without_questions(client, user, login):
    login(user)
    res = client.post('/api/games')
    assert res.status_code == 503
    assert Game.query.count() == 0


def test_answer_correct(client, user, login, game_w_questions):
    login(user)
    letter = game_w_questions.current_game_question.correct_answer_key

    res = client.put(f'/api/games/{game_w_questions.id}/answer', json={'letter': letter})
    assert res.status_code == 200
    data = res.get_json()
    assert data['answer_correct'] is True
    assert data['game']['finished'] is False
    assert data['game']['current_level'] > 0
    assert 'message' not in data


def test_answer_incorrect(client, user, login, game_w_questions):
    login(user)

    res = client.put(f'/api/games/{game_w_questions.id}/answer', json={})
    data = res.get_json()
    assert data['answer_correct'] is False
    assert data['game']['finished'] is True
    assert data['game']['status'] == 'fail'
    assert 'right' in data['message']


def test_take_money(client, user, login, game_w_questions):
    game_w_questions.current_level = 2
    db.session.commit()
    login(user)

    res = client.put(f'/api/games/{game_w_questions.id}/take_money')
    assert res.status_code == 200
    data = res.get_json()
    assert data['game']['finished'] is True
    assert data['game']['prize'] == 200
    assert data['game']['status'] == 'money'
    assert data['message']
    assert db.session.get(User, user.id).balance == 200


def test_take_money_twice(client, user, login, game_w_questions):
    login(user)
    client.put(f'/api/games/{game_w_questions.id}/take_money')
    res = client.put(f'/api/games/{game_w_questions.id}/take_money')
    assert res.status_code == 400
    assert res.get_json()['error']


def test_help_fifty_fifty(client, user, login, game_w_questions):
    login(user)
    assert game_w_questions.current_game_question.help_hash.get('fifty_fifty') is None

    res = client.put(f'/api/games/{game_w_questions.id}/help', json={'help_type': 'fifty_fifty'})
    assert res.status_code == 200
    game = res.get_json()
    assert game['finished'] is False
    assert game['fifty_fifty_used'] is True
    hint = game['current_question']['help_hash']['fifty_fifty']
    assert 'd' in hint
    assert len(hint) == 2


def test_help_audience(client, user, login, game_w_questions):
    login(user)
    res = client.put(f'/api/games/{game_w_questions.id}/help', json={'help_type': 'audience_help'})
    game = res.get_json()
    assert game['audience_help_used'] is True
    assert set(game['current_question']['help_hash']['audience_help']) == {'a', 'b', 'c', 'd'}


def test_help_used_twice(client, user, login, game_w_questions):
    login(user)
    client.put(f'/api/games/{game_w_questions.id}/help', json={'help_type': 'friend_call'})
    res = client.put(f'/api/games/{game_w_questions.id}/help', json={'help_type': 'friend_call'})
    assert res.status_code == 400
    assert 'friend_call' in res.get_json()['error']


def test_help_unknown_type(client, user, login, game_w_questions):
    login(user)
    res = client.put(f'/api/games/{game_w_questions.id}/help', json={'help_type': 'nope'})
    assert res.status_code == 400


def test_show_own_game(client, user, login, game_w_questions):
    login(user)
    res = client.get(f'/api/games/{game_w_questions.id}')
    assert res.status_code == 200
    game = res.get_json()
    assert game['finished'] is False
    assert game['user_id'] == user.id


def test_show_game_anonymous(client, game_w_questions):
    res = client.get(f'/api/games/{game_w_questions.id}')
    assert res.status_code == 401


def test_show_alien_game(client, user, login, make_user, make_game):
    alien_game = make_game(make_user('stranger'))
    login(user)

    res = client.get(f'/api/games/{alien_game.id}')
    assert res.status_code == 403
    assert res.get_json()['error']


def test_answer_alien_game(client, user, login, make_user, make_game):
    alien_game = make_game(make_user('stranger'))
    login(user)

    res = client.put(f'/api/games/{alien_game.id}/answer', json={'letter': 'd'})
    assert res.status_code == 403
    assert db.session.get(Game, alien_game.id).current_level == 0


def test_missing_game(client, user, login):
    login(user)
    assert client.get('/api/games/999').status_code == 404
