"""
WebSocket Event Handlers

Handles all WebSocket events for real-time play: key presses, resets, and the
timer-driven pushes (message clears, celebration tiles) that HTTP polling
would otherwise miss.
"""

from dataclasses import asdict
from flask import request
from flask_socketio import emit, join_room, leave_room
from ..models.errors import GameNotOver, GuessRejected
from ..services.game_service import get_game_service
from ..utils.decorators import websocket_game_required
from ..utils.game_logger import game_logger


def game_room(game_id):
    return f"game_{game_id}"


def _serialize(payload):
    if isinstance(payload, dict) and 'state' in payload and not isinstance(payload['state'], dict):
        payload = dict(payload, state=asdict(payload['state']))
    return payload


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def broadcast(game_id, event, payload):
        """Forward service events to everyone watching the game."""
        socketio.emit(event, _serialize(payload), room=game_room(game_id))

    game_service = get_game_service()
    if game_service:
        game_service.add_listener(broadcast)

    def emit_state(game_id, state, **extra):
        emit('game_state_update', {
            'success': True,
            'state': asdict(state),
            **extra
        }, room=game_room(game_id))

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        game_logger.log_user_action(request, 'socket_connect')

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Handle WebSocket disconnection. Games stay alive for a reconnect."""
        game_logger.log_user_action(request, 'socket_disconnect')

    @socketio.on('join_game')
    @websocket_game_required
    def handle_join_game(data, game_service=None):
        """Join a game room and receive its current state."""
        game_id = data['game_id']
        join_room(game_room(game_id))
        game_logger.log_user_action(request, 'join_game', game_id)

        emit('game_state_update', {
            'success': True,
            'state': asdict(game_service.get_game_state(game_id))
        })

    @socketio.on('leave_game')
    def handle_leave_game(data):
        """Stop receiving updates for a game."""
        game_id = data.get('game_id') if isinstance(data, dict) else None
        if not game_id:
            emit('error', {'error': 'Game ID is required'})
            return

        leave_room(game_room(game_id))
        game_logger.log_user_action(request, 'leave_game', game_id)

    @socketio.on('key_press')
    @websocket_game_required
    def handle_key_press(data, game_service=None):
        """Apply a key from the physical or on-screen keyboard."""
        game_id = data['game_id']
        key = data.get('key')
        join_room(game_room(game_id))
        game_logger.log_user_action(request, 'key_press', game_id, key=key)

        try:
            state = game_service.press_key(game_id, key)
        except GuessRejected as e:
            game_logger.log_server_response(
                request, 'key_press', False, {'error': e.message}, game_id,
                validation_error=e.message, attempted_guess=e.guess
            )
            emit('game_message', {'message': e.message}, room=game_room(game_id))
            emit('game_state_update', {
                'success': False,
                'error': e.message,
                'state': asdict(game_service.get_game_state(game_id))
            }, room=game_room(game_id))
            return
        except Exception as e:
            game_logger.log_error(request, e, 'key_press', game_id)
            emit('error', {'error': str(e)})
            return

        emit_state(game_id, state)
        if state.game_over:
            emit('game_message', {'message': state.message}, room=game_room(game_id))

    @socketio.on('reset_game')
    @websocket_game_required
    def handle_reset_game(data, game_service=None):
        """Start a new word in the same session once the game has ended."""
        game_id = data['game_id']
        game_logger.log_user_action(request, 'reset_game', game_id)

        try:
            state = game_service.reset_game(game_id)
        except GameNotOver as e:
            emit('error', {'error': str(e)})
            return

        emit_state(game_id, state)

    @socketio.on('proposal_answer')
    @websocket_game_required
    def handle_proposal_answer(data, game_service=None):
        """Answer the celebration proposal. Never changes the game itself."""
        game_id = data['game_id']
        game_logger.log_user_action(request, 'proposal_answer', game_id, answer=data.get('answer'))

        if game_service.answer_proposal(game_id, data.get('answer')) is None:
            emit('error', {'error': 'No proposal to answer'})
