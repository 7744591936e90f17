import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = BASE_DIR / 'data'


def sqlite_engine_options(database_uri):
    """Engine options for SQLite: wait on the write lock instead of failing,
    and let pooled connections move between request threads."""
    if not database_uri.startswith('sqlite'):
        return {}
    return {
        'connect_args': {
            'timeout': float(os.environ.get('SQLITE_BUSY_TIMEOUT') or 30),
            'check_same_thread': False,
        }
    }


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-change-this'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        f'sqlite:///{DATA_DIR}/assets.db'
    SQLALCHEMY_ENGINE_OPTIONS = sqlite_engine_options(SQLALCHEMY_DATABASE_URI)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SERIAL_MAX_ATTEMPTS = int(os.environ.get('SERIAL_MAX_ATTEMPTS') or 20)
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = sqlite_engine_options(SQLALCHEMY_DATABASE_URI)
    LOG_LEVEL = 'DEBUG'
