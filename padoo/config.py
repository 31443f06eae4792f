"""
Configuration settings for the Padoo Delivery admin service
"""
import os
from datetime import timedelta


class Config:
    """Flask application configuration"""
    
    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'
    
    # Database configuration
    BASE_DIR = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(BASE_DIR, 'instance', 'padoo.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    
    # Admin Credentials (session-based, separate from driver/shop auth)
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME') or 'admin'
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or 'admin123'
    
    # Admin dashboard idle timeout, mirrored by the dashboard client
    ADMIN_SESSION_TIMEOUT_MINUTES = int(os.environ.get('ADMIN_SESSION_TIMEOUT_MINUTES') or 15)
    PERMANENT_SESSION_LIFETIME = timedelta(minutes=ADMIN_SESSION_TIMEOUT_MINUTES)
    
    # Driver/shop sessions are purged after this many days without activity
    USER_SESSION_MAX_AGE_DAYS = int(os.environ.get('USER_SESSION_MAX_AGE_DAYS') or 7)
    
    # Application settings
    DEFAULT_CATEGORY_COLOR = '#ff6b35'
    DEFAULT_CATEGORY_ICON = 'fas fa-utensils'
    MIN_PASSWORD_LENGTH = 6
    SEED_DEFAULT_CATEGORIES = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    WTF_CSRF_ENABLED = False
    SEED_DEFAULT_CATEGORIES = False
