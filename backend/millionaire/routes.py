from flask import Blueprint, request, jsonify
from flask_login import login_user, logout_user, login_required, current_user
from millionaire import db
from millionaire.models import User

main = Blueprint('main', __name__)

@main.route('/')
def index():
    users = User.query.order_by(User.balance.desc()).all()
    return jsonify({
        'message': 'Welcome to the Millionaire game server!',
        'users': [u.to_dict() for u in users],
    })

@main.route('/users/add', methods=['POST'])
def add_user():
    data = request.get_json()
    if not data or not 'username' in data or not 'password' in data:
        return jsonify({'error': 'Missing username or password'}), 400

    if User.query.filter_by(username=data['username']).first():
        return jsonify({'error': 'Username already exists'}), 400

    user = User(username=data['username'], name=data.get('name'))
    user.set_password(data['password'])
    db.session.add(user)
    db.session.commit()

    return jsonify({'message': 'User created successfully', 'user': user.to_dict()}), 201

@main.route('/users/<int:user_id>')
def show_user(user_id):
    user = db.get_or_404(User, user_id)
    return jsonify({
        'user': user.to_dict(),
        'games': [g.to_dict(include_question=False) for g in user.games],
        # Only the owner may change their name and password
        'can_edit': current_user.is_authenticated and current_user.id == user.id,
    })

@main.route('/login', methods=['POST'])
def login():
    data = request.get_json() or {}
    user = User.query.filter_by(username=data.get('username')).first()
    if user and user.check_password(data.get('password')):
        login_user(user, remember=True)
        return jsonify({'message': 'Logged in successfully.', 'user': user.to_dict()})
    return jsonify({'error': 'Invalid username or password'}), 401

@main.route('/logout')
@login_required
def logout():
    logout_user()
    return jsonify({'message': 'Logged out successfully.'})
