"""Application settings read from the environment.

Protean infrastructure (databases, brokers, event store) is configured in
``domain.toml``; the values here cover the HTTP surface and the bearer tokens.
"""

import os

# Variables the process refuses to start without in production
REQUIRED_IN_PRODUCTION = ("DATABASE_URL", "JWT_SECRET", "COOKIE_SECRET")

_DEV_SECRET = "supersecret"


def is_production() -> bool:
    return os.environ.get("PROTEAN_ENV") == "production"


def jwt_secret() -> str:
    return os.environ.get("JWT_SECRET", _DEV_SECRET)


def jwt_expires_in() -> int:
    """Lifetime of issued bearer tokens, in seconds."""
    return int(os.environ.get("JWT_EXPIRES_IN", "86400"))


def store_cors() -> list[str]:
    """Allowed storefront origins, from the comma separated STORE_CORS variable."""
    raw = os.environ.get("STORE_CORS", "http://localhost:8000,http://localhost:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def missing_required_variables() -> list[str]:
    """Names of required production variables that are not set."""
    return [name for name in REQUIRED_IN_PRODUCTION if not os.environ.get(name)]
