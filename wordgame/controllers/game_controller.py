"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from dataclasses import asdict
from ..config.game_settings import KEYBOARD_ROWS, MAX_ROUNDS, WORD_LENGTH
from ..models.errors import GameNotOver, GuessRejected
from ..services.game_service import get_game_service
from ..utils.decorators import require_game
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _rejected(action, game_id, error, game_service):
    """400 response for a guess the player has to fix."""
    state = game_service.get_game_state(game_id)
    error_response = {
        'success': False,
        'error': error.message,
        'state': asdict(state)
    }
    game_logger.log_server_response(
        request, action, False, error_response, game_id,
        validation_error=error.message, attempted_guess=error.guess
    )
    return jsonify(error_response), 400


def _server_error(action, error, game_id=None):
    game_logger.log_error(request, error, action, game_id)
    error_response = {
        'success': False,
        'error': str(error)
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 500


@game_bp.route('/new_game', methods=['POST'])
def new_game():
    """Create a new game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'new_game')

        game_id = game_service.create_new_game()
        state = game_service.get_game_state(game_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state),
            'keyboard': KEYBOARD_ROWS
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            word_length=WORD_LENGTH, max_rounds=MAX_ROUNDS
        )

        return jsonify(response_data)

    except Exception as e:
        return _server_error('new_game', e)


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game
def get_state(game_id, game_service=None):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        state = game_service.get_game_state(game_id)
        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            current_row=state.current_row, game_over=state.game_over
        )

        return jsonify(response_data)

    except Exception as e:
        return _server_error('get_state', e, game_id)


@game_bp.route('/game/<game_id>/key', methods=['POST'])
@require_game
def press_key(game_id, game_service=None):
    """Apply one key press: a letter, ENTER or DELETE."""
    try:
        data = request.get_json(silent=True)
        if not data or 'key' not in data:
            error_response = {
                'success': False,
                'error': 'Key is required'
            }
            game_logger.log_server_response(request, 'key_press', False, error_response, game_id)
            return jsonify(error_response), 400

        key = data['key']
        game_logger.log_user_action(request, 'key_press', game_id, key=key)

        try:
            state = game_service.press_key(game_id, key)
        except GuessRejected as e:
            return _rejected('key_press', game_id, e, game_service)

        response_data = {
            'success': True,
            'state': asdict(state)
        }
        game_logger.log_server_response(
            request, 'key_press', True, response_data, game_id,
            current_row=state.current_row, game_over=state.game_over
        )

        return jsonify(response_data)

    except Exception as e:
        return _server_error('key_press', e, game_id)


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
@require_game
def make_guess(game_id, game_service=None):
    """Submit a whole word for validation and evaluation."""
    try:
        data = request.get_json(silent=True)
        if not data or 'guess' not in data:
            error_response = {
                'success': False,
                'error': 'Guess is required'
            }
            game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
            return jsonify(error_response), 400

        guess = data['guess']
        game_logger.log_user_action(request, 'submit_guess', game_id, guess=guess)

        try:
            state = game_service.make_guess(game_id, guess)
        except GuessRejected as e:
            return _rejected('submit_guess', game_id, e, game_service)

        response_data = {
            'success': True,
            'state': asdict(state)
        }
        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            current_row=state.current_row, game_over=state.game_over
        )

        return jsonify(response_data)

    except Exception as e:
        return _server_error('submit_guess', e, game_id)


@game_bp.route('/game/<game_id>/reset', methods=['POST'])
@require_game
def reset_game(game_id, game_service=None):
    """Play again with a new word once the current game is over."""
    try:
        game_logger.log_user_action(request, 'reset_game', game_id)

        try:
            state = game_service.reset_game(game_id)
        except GameNotOver as e:
            error_response = {
                'success': False,
                'error': str(e)
            }
            game_logger.log_server_response(request, 'reset_game', False, error_response, game_id)
            return jsonify(error_response), 409

        response_data = {
            'success': True,
            'state': asdict(state)
        }
        game_logger.log_server_response(request, 'reset_game', True, response_data, game_id)

        return jsonify(response_data)

    except Exception as e:
        return _server_error('reset_game', e, game_id)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
def delete_game(game_id):
    """Delete a game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)
        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)

        return jsonify(response_data)

    except Exception as e:
        return _server_error('delete_game', e, game_id)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_games': len(game_service.games) if game_service else 0,
            'words_loaded': len(game_service.word_list) if game_service and game_service.is_loaded else 0,
            'celebration_mode': game_service.celebration_mode if game_service else False,
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
