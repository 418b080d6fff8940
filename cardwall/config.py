import os


DEFAULT_CARD_COLORS = "green,yellow,orange,red,purple,blue"


def _load_palette(raw):
    """Number a comma-separated color list from 1: "green,red" -> ((1, "green"), (2, "red"))."""
    colors = [c.strip() for c in raw.split(",") if c.strip()]
    return tuple((i, color) for i, color in enumerate(colors, start=1))


class Config:
    """Base configuration. Shared across all environments."""

    # --- Required ---
    SECRET_KEY = os.environ.get("SECRET_KEY")

    # Handle DATABASE_URL: some PaaS providers (Railway, Heroku) use
    # "postgres://" which SQLAlchemy 1.4+ doesn't accept.
    _db_url = os.environ.get("DATABASE_URL", "")
    if _db_url.startswith("postgres://"):
        _db_url = _db_url.replace("postgres://", "postgresql://", 1)
    SQLALCHEMY_DATABASE_URI = _db_url or None

    # --- API access ---
    # Bearer token accepted by /api/* in place of a login session.
    CARDWALL_API_KEY = os.environ.get("CARDWALL_API_KEY")
    CARD_CREATE_RATE_LIMIT = os.environ.get("CARD_CREATE_RATE_LIMIT", "120 per minute")

    # --- Cards ---
    # Fixed palette, read once at startup. Cards store only the ids they use.
    CARD_COLORS = _load_palette(os.environ.get("CARD_COLORS", DEFAULT_CARD_COLORS))
    CARD_TEXT_MAX_LENGTH = int(os.environ.get("CARD_TEXT_MAX_LENGTH", 5000))

    # --- SQLAlchemy ---
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 300,
    }

    # --- Session / cookies ---
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    REMEMBER_COOKIE_HTTPONLY = True
    REMEMBER_COOKIE_SAMESITE = "Lax"

    @staticmethod
    def validate():
        """Fail fast if required env vars are missing."""
        required = [
            "SECRET_KEY",
            "DATABASE_URL",
        ]
        missing = [v for v in required if not os.environ.get(v)]
        if missing:
            raise RuntimeError(
                f"Missing required environment variables: {', '.join(missing)}"
            )


class DevConfig(Config):
    """Local development."""

    DEBUG = True
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False


class TestConfig(Config):
    """Testing — in-memory SQLite, no rate limits."""

    TESTING = True
    DEBUG = True
    SECRET_KEY = "test-secret-key-not-for-production"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    CARDWALL_API_KEY = "test-api-key"
    CARD_COLORS = _load_palette(DEFAULT_CARD_COLORS)
    CARD_TEXT_MAX_LENGTH = 5000
    RATELIMIT_ENABLED = False  # disable rate limiting in tests
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False
    SERVER_NAME = "localhost"

    @staticmethod
    def validate():
        """Skip validation in test mode — everything is hardcoded."""
        pass


class ProdConfig(Config):
    """Production."""

    DEBUG = False
    SESSION_COOKIE_SECURE = True
    REMEMBER_COOKIE_SECURE = True


config_by_name = {
    "development": DevConfig,
    "production": ProdConfig,
    "testing": TestConfig,
}
