import os
from dotenv import load_dotenv

load_dotenv()

# Builder tokens are meant to live for minutes to hours, never days.
MAX_BUILDER_TOKEN_TTL_MINUTES = 12 * 60

DEFAULT_BUILDER_SCOPES = (
    "pages:read",
    "pages:write",
    "layouts:read",
    "layouts:write",
    "menus:read",
    "menus:write",
    "content:read",
    "content:write",
)


def _csv(value):
    return [item.strip() for item in value.split(",") if item.strip()]


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-change-me-0123456789abcdef")
    JWT_ALGORITHM = "HS256"
    JWT_TOKEN_LOCATION = ["headers"]
    SESSION_TOKEN_TTL_MINUTES = int(os.getenv("SESSION_TOKEN_TTL_MINUTES", "480"))
    BUILDER_TOKEN_TTL_MINUTES = int(os.getenv("BUILDER_TOKEN_TTL_MINUTES", "60"))
    BUILDER_SCOPES = DEFAULT_BUILDER_SCOPES

    BUILDER_BASE_URL = os.getenv(
        "BUILDER_BASE_URL", "https://sitebuilderprod-sywg.vercel.app/index.html"
    )
    API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000")

    CORS_ORIGINS = _csv(os.getenv("CORS_ORIGINS", "*"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///brandstudio_dev.db")


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_size": 5,
        "pool_recycle": 300,
        "pool_pre_ping": True,
    }


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = "testing-jwt-secret-0123456789abcdef0123456789"
    API_BASE_URL = "https://api.test"
    BUILDER_BASE_URL = "https://builder.test/index.html"
    LOG_LEVEL = "WARNING"


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def validate_config(app) -> None:
    """Refuse to boot with settings that would make tokens forgeable or eternal."""
    if not app.config.get("JWT_SECRET_KEY"):
        raise RuntimeError("JWT_SECRET_KEY must be set")

    ttl = app.config["BUILDER_TOKEN_TTL_MINUTES"]
    if ttl <= 0 or ttl > MAX_BUILDER_TOKEN_TTL_MINUTES:
        raise RuntimeError(
            f"BUILDER_TOKEN_TTL_MINUTES must be between 1 and {MAX_BUILDER_TOKEN_TTL_MINUTES}"
        )
