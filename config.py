import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # SQLite database file stored next to this module as pawwalk.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "pawwalk.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Create tables at startup instead of running migrations (tests / local demo)
    AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES", "false").lower() == "true"

    # Session cookie name for our auth token
    AUTH_COOKIE_NAME = "pawwalk_session"

    # 8 hours session lifetime
    SESSION_LIFETIME_SECONDS = 8 * 60 * 60

    # Idle timeout: 20 minutes
    IDLE_TIMEOUT_SECONDS = 20 * 60

    # Session/cookie security defaults
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "false").lower() == "true"

    # Scheduling: "interval" ([start, end) overlap) or "whole_day" (one accepted walk per date)
    BOOKING_CONFLICT_MODE = os.getenv("BOOKING_CONFLICT_MODE", "interval")

    # Loyalty: completed walks before an automatic discount is granted
    LOYALTY_THRESHOLD = int(os.getenv("LOYALTY_THRESHOLD", "10"))
    LOYALTY_DISCOUNT_PERCENT = int(os.getenv("LOYALTY_DISCOUNT_PERCENT", "20"))
    LOYALTY_MONTHS = int(os.getenv("LOYALTY_MONTHS", "1"))

    # Self-service subscription
    SUBSCRIPTION_DISCOUNT_PERCENT = int(os.getenv("SUBSCRIPTION_DISCOUNT_PERCENT", "10"))
    SUBSCRIPTION_MONTHS = int(os.getenv("SUBSCRIPTION_MONTHS", "1"))

    # bcrypt work factor
    BCRYPT_ROUNDS = 12

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Basic app settings
    DEBUG = False


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    AUTO_CREATE_TABLES = True
    BOOKING_CONFLICT_MODE = "interval"
    BCRYPT_ROUNDS = 4
    LOG_LEVEL = "DEBUG"
