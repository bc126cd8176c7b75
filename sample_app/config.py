"""
Configuration management for the Widget sample app.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class BaseConfig:
    """Base configuration."""
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_SORT_KEYS = False

    APP_NAME = 'Widget Sample App API'
    APP_VERSION = '1.0.0'

    # Two layer cache TTLs (seconds)
    CACHE_ITEM_TTL = int(os.getenv('CACHE_ITEM_TTL', 900))    # 15 minutes
    CACHE_QUERY_TTL = int(os.getenv('CACHE_QUERY_TTL', 300))  # 5 minutes, complete queries
    CACHE_FACET_TTL = int(os.getenv('CACHE_FACET_TTL', 60))   # 1 minute, filtered queries
    CACHE_DEBUG_LOGGING = _bool_env('CACHE_DEBUG_LOGGING', True)

    # Create tables on start-up and seed them when both are empty
    AUTO_INIT_DB = _bool_env('AUTO_INIT_DB', True)
    SEED_ON_EMPTY = _bool_env('SEED_ON_EMPTY', True)

    CORS_ORIGINS = [
        'http://localhost:3000',
        'http://127.0.0.1:3000',
    ]

    # Response compression
    COMPRESS_MIMETYPES = ['application/json', 'text/html']
    COMPRESS_LEVEL = 6
    COMPRESS_MIN_SIZE = 500


class DevelopmentConfig(BaseConfig):
    """Development configuration."""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv(
        'DATABASE_URL',
        'sqlite:///sample-app.db'
    )


class ProductionConfig(BaseConfig):
    """Production configuration."""
    DEBUG = False

    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///sample-app.db')

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,  # Verify connections before using
    }

    # Debug cache logging is noisy in production
    CACHE_DEBUG_LOGGING = _bool_env('CACHE_DEBUG_LOGGING', False)

    _secret_key = os.getenv('SECRET_KEY', '')

    @classmethod
    def validate_secret_key(cls) -> str:
        """
        Validate SECRET_KEY in production environment.

        Raises:
            RuntimeError: If SECRET_KEY is missing, empty, or too short
        """
        if not cls._secret_key:
            raise RuntimeError(
                "CRITICAL: SECRET_KEY environment variable is not set!\n"
                "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""
            )

        if len(cls._secret_key) < 32:
            raise RuntimeError(
                "CRITICAL: SECRET_KEY is too short (minimum 32 characters required)!\n"
                "Generate a secure key with: python -c \"import secrets; print(secrets.token_hex(32))\""
            )

        return cls._secret_key

    SECRET_KEY = _secret_key  # Will be validated at app startup


class TestingConfig(BaseConfig):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    AUTO_INIT_DB = False
    SEED_ON_EMPTY = False
    CACHE_DEBUG_LOGGING = False


config_map = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig
}


def get_config(config_name: str = 'development'):
    """Get configuration class by name."""
    return config_map.get(config_name, DevelopmentConfig)


def validate_config(config_name: str = 'development') -> None:
    """
    Validate configuration before app startup.

    Raises:
        RuntimeError: If validation fails in production
    """
    if config_name == 'production':
        ProductionConfig.validate_secret_key()
