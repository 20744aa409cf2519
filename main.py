"""
Word Game Server - Main Entry Point

This is the main entry point for the word game server.
It initializes the game service, starts loading the word list and runs the
Flask-SocketIO application.
"""

from wordgame import create_app
from wordgame.config import Config
from wordgame.services.game_service import initialize_game_service
from wordgame.services.timer_service import TimerRegistry
from wordgame.utils.game_logger import game_logger


def load_words_worker(game_service):
    """
    Background task that fetches the word list once.

    Games created before it finishes stay in the loading phase and start as
    soon as the list (or the fallback word) is available.
    """
    words = game_service.load_words(Config.WORD_SOURCE, Config.FALLBACK_WORD)
    print(f"✓ Word list ready ({len(words)} words)")


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        # Timers are bound to the socketio instance once the app exists
        timers = TimerRegistry()
        game_service = initialize_game_service(
            timers=timers,
            scoring_rule=Config.SCORING_RULE,
            message_timeout=Config.MESSAGE_TIMEOUT_SECONDS,
            celebration_mode=Config.CELEBRATION_MODE,
            tile_delay=Config.REVEAL_TILE_DELAY_SECONDS
        )
        print("✓ Game service initialized successfully")

        # Create Flask app
        print("Creating Flask application...")
        app, socketio = create_app(Config)
        timers.bind(socketio.start_background_task, socketio.sleep)
        print("✓ Flask application created successfully")

        # Load the word list without holding up the server
        socketio.start_background_task(load_words_worker, game_service)

        game_logger.logger.info(
            f"Word Game Server starting - celebration mode: {Config.CELEBRATION_MODE}, "
            f"scoring rule: {Config.SCORING_RULE}"
        )

        print(f"\nStarting Word Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print(f"Celebration mode: {Config.CELEBRATION_MODE}")
        print("=" * 50)

        # Start the server
        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Word Game Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
