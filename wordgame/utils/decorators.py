"""
Game Lookup Decorators

Contains decorators that resolve the game session for HTTP and WebSocket handlers.
"""

from functools import wraps
from flask import jsonify
from flask_socketio import emit


def require_game(f):
    """
    Decorator for HTTP endpoints that operate on an existing game.

    Answers 500 when the game service is not running and 404 when the game id
    is unknown; otherwise calls the view with ``game_service`` added.
    """
    @wraps(f)
    def decorated_function(game_id, *args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        if game_service.get_session(game_id) is None:
            return jsonify({
                'success': False,
                'error': 'Game not found'
            }), 404

        kwargs['game_service'] = game_service
        return f(game_id, *args, **kwargs)

    return decorated_function


def websocket_game_required(f):
    """Decorator for WebSocket events whose payload carries a ``game_id``."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        data = args[0] if args else None
        if not isinstance(data, dict) or not data.get('game_id'):
            emit('error', {'error': 'Game ID is required'})
            return

        if game_service.get_session(data['game_id']) is None:
            emit('error', {'error': 'Game not found'})
            return

        kwargs['game_service'] = game_service
        return f(*args, **kwargs)

    return decorated_function
