import os


def _int_env(name, default):
    return int(os.getenv(name, default))


def twilio_settings():
    """SMS credentials as (sid, token, sender), or None when any is unset.

    Read from the environment on every call.
    """
    values = tuple(os.getenv(key) for key in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_SMS_FROM"))
    return values if all(values) else None


class BaseConfig:
    JSON_SORT_KEYS = False
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "*")

    # Auth
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-insecure-jwt-key")
    ACCESS_TOKEN_LIFETIME_MIN = _int_env("ACCESS_TOKEN_LIFETIME_MIN", 15)
    REFRESH_TOKEN_LIFETIME_DAYS = _int_env("REFRESH_TOKEN_LIFETIME_DAYS", 30)
    OTP_EXPIRY_MINUTES = _int_env("OTP_EXPIRY_MINUTES", 5)
    OTP_LENGTH = _int_env("OTP_LENGTH", 4)

    # Rate limits (flask-limiter strings)
    RATELIMIT_STORAGE_URL = os.getenv("RATELIMIT_STORAGE_URL", "memory://")
    OTP_SEND_LIMIT_PER_IP = os.getenv("OTP_SEND_LIMIT_PER_IP", "5 per 15 minutes")
    OTP_SEND_LIMIT_PER_PHONE = os.getenv("OTP_SEND_LIMIT_PER_PHONE", "3 per 15 minutes")
    SIGNUP_LIMIT_PER_IP = os.getenv("SIGNUP_LIMIT_PER_IP", "10 per 30 minutes")
    LOGIN_LIMIT_PER_IP = os.getenv("LOGIN_LIMIT_PER_IP", "10 per 30 minutes")

    # Business certificate uploads
    MAX_CONTENT_LENGTH = _int_env("MAX_CONTENT_LENGTH", 10 * 1024 * 1024)
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", os.path.join(os.getcwd(), "uploads"))
    UPLOAD_BASE_URL = os.getenv("UPLOAD_BASE_URL", "/uploads")

    OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "mandi-backend")
    OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318/v1/traces")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-insecure-key")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///dev.db")


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-key"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")


class ProductionConfig(BaseConfig):
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.getenv("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    REQUIRED_ENV = ("SECRET_KEY", "DATABASE_URL", "JWT_SECRET")

    @classmethod
    def validate(cls):
        missing = [key for key in cls.REQUIRED_ENV if not os.getenv(key)]
        if missing:
            raise RuntimeError(f"Missing required env vars in production: {', '.join(missing)}")


CONFIGS = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config_class():
    env = os.getenv("APP_ENV", "development").lower()
    config = CONFIGS.get(env, DevelopmentConfig)
    if config is ProductionConfig:
        config.validate()
    return config
