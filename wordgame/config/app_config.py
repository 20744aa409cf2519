"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

CONFIG_DIR = os.path.dirname(os.path.abspath(__file__))
PACKAGE_DIR = os.path.dirname(CONFIG_DIR)

# Load environment variables from config.env
load_dotenv(os.path.join(CONFIG_DIR, 'config.env'))


def _env_flag(name: str, default: str = 'False') -> bool:
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = _env_flag('DEBUG')
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Word Source Settings
    WORD_SOURCE = os.getenv('WORD_SOURCE') or os.path.join(PACKAGE_DIR, 'static', 'words.txt')
    FALLBACK_WORD = os.getenv('FALLBACK_WORD', 'REACT').upper()

    # Game Settings
    MESSAGE_TIMEOUT_SECONDS = float(os.getenv('MESSAGE_TIMEOUT_SECONDS', 2))
    SCORING_RULE = os.getenv('SCORING_RULE', 'simple')

    # Celebration Settings
    CELEBRATION_MODE = _env_flag('CELEBRATION_MODE')
    REVEAL_TILE_DELAY_SECONDS = float(os.getenv('REVEAL_TILE_DELAY_SECONDS', 0.15))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    MESSAGE_TIMEOUT_SECONDS = 0
    REVEAL_TILE_DELAY_SECONDS = 0


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
