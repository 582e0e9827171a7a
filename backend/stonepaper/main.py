from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the stone paper scissor server!'})


@main.route('/api/health')
def health():
    engine = current_app.extensions['match_engine']
    return jsonify({'status': 'ok', 'rooms': len(engine.registry)})
