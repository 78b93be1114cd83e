import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes')


class Config:
    # Provide a safe development fallback so the app still boots without a .env file.
    SECRET_KEY = os.getenv('SECRET_KEY') or 'dev-secret-key-change-me'
    DATABASE_URL = os.getenv('DATABASE_URL')
    SQLALCHEMY_DATABASE_URI = DATABASE_URL or 'sqlite:///league.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Bearer tokens
    JWT_SECRET = os.getenv('JWT_SECRET') or SECRET_KEY
    JWT_ALGORITHM = os.getenv('JWT_ALGORITHM', 'HS256')
    JWT_EXPIRES_MINUTES = int(os.getenv('JWT_EXPIRES_MINUTES', '60'))

    # JSON payloads only; no cookie sessions or HTML forms to protect
    WTF_CSRF_ENABLED = False
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024

    # Listing behaviour
    DEFAULT_PAGE_SIZE = int(os.getenv('DEFAULT_PAGE_SIZE', '10'))
    MAX_PAGE_SIZE = int(os.getenv('MAX_PAGE_SIZE', '100'))
    # Filtered listings with zero rows answer 404 instead of an empty 200
    EMPTY_RESULTS_NOT_FOUND = _env_flag('EMPTY_RESULTS_NOT_FOUND', 'true')

    # Browser frontend allowed to call the API (comma separated)
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv('CORS_ORIGINS', 'http://localhost:5173').split(',')
        if origin.strip()
    ]
    CORS_MAX_AGE = int(os.getenv('CORS_MAX_AGE', '600'))  # seconds browsers cache a preflight

    RATELIMIT_ENABLED = _env_flag('RATELIMIT_ENABLED', 'true')
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    BCRYPT_LOG_ROUNDS = int(os.getenv('BCRYPT_LOG_ROUNDS', '12'))


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET = 'test-jwt-secret'
    RATELIMIT_ENABLED = False
    EMPTY_RESULTS_NOT_FOUND = True
    LOG_LEVEL = 'WARNING'
    BCRYPT_LOG_ROUNDS = 4
