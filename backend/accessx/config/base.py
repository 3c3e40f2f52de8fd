"""Settings shared by every environment."""
import os
from datetime import timedelta

class BaseConfig:
    """Base configuration."""
    SECRET_KEY = os.getenv('SECRET_KEY') or 'dev-secret-key-change-in-production'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False

    # JWT Configuration
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY') or 'jwt-secret-key-change-in-production'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=8)
    JWT_ALGORITHM = 'HS256'

    # CORS
    CORS_ORIGINS = ["http://localhost:*", "http://127.0.0.1:*"]

    # Rate Limiting
    RATELIMIT_STORAGE_URI = os.getenv('REDIS_URL') or 'memory://'
    REDEEM_RATE_LIMIT = "30 per minute"

    # Record store backend: 'sqlalchemy' or 'memory'
    RECORD_STORE = os.getenv('RECORD_STORE', 'sqlalchemy')

    # Session listing notifications (optional)
    REDIS_URL = os.getenv('REDIS_URL')
    SESSION_EVENTS_CHANNEL = 'accessx:sessions'

    # Attendance protocol
    ATTENDANCE_WINDOW_MINUTES = 10
    PROXIMITY_MAX_DISTANCE_METERS = 100

    # Validator badge metadata
    BADGE_IMAGE_URL = 'https://cdn-icons-png.flaticon.com/512/6298/6298900.png'
    BADGE_DESCRIPTION = 'Official AU AccessX Attendance Proof'

    # Captured photos arrive inline as data URIs
    MAX_CONTENT_LENGTH = 8 * 1024 * 1024  # 8MB

    # Logging
    LOG_LEVEL = 'INFO'
    LOG_FILE = 'logs/app.log'
