"""Application configuration."""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY', 'agriconnect-secret-key-change-in-production')
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///agriconnect.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Optional admin account created at startup
    SEED_ADMIN_EMAIL = os.environ.get('SEED_ADMIN_EMAIL', '')
    SEED_ADMIN_PASSWORD = os.environ.get('SEED_ADMIN_PASSWORD', '')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration - in-memory database."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    LOG_LEVEL = 'WARNING'
    SEED_ADMIN_EMAIL = ''
    SEED_ADMIN_PASSWORD = ''


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
