import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    # App settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-key-change-in-production')
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'jwt-secret-change-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Storage
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'memory')  # 'memory' or 'sql'
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URI', 'sqlite:///timecapsule.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SEED_DEMO_DATA = _env_flag('SEED_DEMO_DATA', True)

    # Reference-integrity policies
    SCHEDULE_CONFLICT_POLICY = os.getenv('SCHEDULE_CONFLICT_POLICY', 'reject')
    CATEGORY_DELETE_POLICY = os.getenv('CATEGORY_DELETE_POLICY', 'tolerate')
    CONTACT_DELETE_POLICY = os.getenv('CONTACT_DELETE_POLICY', 'tolerate')

    # Requests without a token run as this user unless AUTH_REQUIRED is set
    DEMO_USER_ID = int(os.getenv('DEMO_USER_ID', '1'))
    AUTH_REQUIRED = _env_flag('AUTH_REQUIRED')

class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv('DEV_DATABASE_URI', 'sqlite:///dev.db')

class TestingConfig(Config):
    TESTING = True
    STORAGE_BACKEND = 'memory'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SEED_DEMO_DATA = True
    AUTH_REQUIRED = False

class ProductionConfig(Config):
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'sql')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URI', 'sqlite:///timecapsule.db')
    AUTH_REQUIRED = _env_flag('AUTH_REQUIRED', True)

# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
