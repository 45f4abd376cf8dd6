from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from millionaire import socketio
from millionaire.models import Game
from millionaire.services.games import engine
from millionaire.services.games.errors import (
    GameError,
    GameAlreadyInProgress,
    InsufficientQuestionBank,
)


games = Blueprint('games', __name__)


def _emit_state(game: Game) -> None:
    socketio.emit('state_update', {'game_id': game.id, 'status': game.status}, to=f"game:{game.id}", namespace='/ws')


def _load_own_game(game_id: int, for_update: bool = False):
    """Return (game, None) for the current user's game, or (None, error response)."""
    query = Game.query.filter_by(id=game_id)
    if for_update:
        query = query.with_for_update()
    game = query.first_or_404()
    if game.user_id != current_user.id:
        current_app.logger.info(f"[forbidden] user={current_user.id} game={game.id}")
        return None, (jsonify({'error': 'This is not your game!'}), 403)
    return game, None


@games.errorhandler(GameError)
def handle_game_error(exc):
    return jsonify({'error': str(exc)}), 400


@games.route('', methods=['POST'])
@login_required
def create_game():
    try:
        game = engine.create_game_for_user(current_user)
    except GameAlreadyInProgress as exc:
        return jsonify({'error': str(exc), 'game_id': exc.game.id}), 409
    except InsufficientQuestionBank as exc:
        return jsonify({'error': str(exc)}), 503
    return jsonify({
        'message': f'Game started at {game.created_at.isoformat()}, good luck!',
        'game': game.to_dict(),
    }), 201


@games.route('/<int:game_id>', methods=['GET'])
@login_required
def show_game(game_id):
    game, error = _load_own_game(game_id)
    if error:
        return error
    return jsonify(game.to_dict())


@games.route('/<int:game_id>/answer', methods=['PUT'])
@login_required
def answer(game_id):
    game, error = _load_own_game(game_id, for_update=True)
    if error:
        return error
    data = request.get_json(silent=True) or {}
    letter = data.get('letter')
    answer_correct = engine.answer_current_question(game, letter)
    _emit_state(game)

    payload = {'answer_correct': answer_correct, 'game': game.to_dict()}
    if not answer_correct:
        gq = game.previous_game_question if game.status == 'won' else game.current_game_question
        correct = gq.correct_answer if gq else None
        payload['message'] = f'Correct answer: {correct}. Game over, prize: {game.prize}'
    elif game.status == 'won':
        payload['message'] = f'You won {game.prize}!'
    return jsonify(payload)


@games.route('/<int:game_id>/take_money', methods=['PUT'])
@login_required
def take_money(game_id):
    game, error = _load_own_game(game_id, for_update=True)
    if error:
        return error
    engine.take_money(game)
    _emit_state(game)
    return jsonify({'message': f'You took {game.prize}', 'game': game.to_dict()})


@games.route('/<int:game_id>/help', methods=['PUT'])
@login_required
def use_help(game_id):
    game, error = _load_own_game(game_id, for_update=True)
    if error:
        return error
    data = request.get_json(silent=True) or {}
    engine.use_help(game, data.get('help_type'))
    _emit_state(game)
    return jsonify(game.to_dict())
