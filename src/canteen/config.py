"""Runtime settings read from the environment.

Persistence, brokers and event processing are configured by Protean through
``domain.toml``; everything else the application needs lives here.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_JWT_SECRET = "default-secret-change-in-production"


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 24
    reset_token_ttl_minutes: int = 60
    bcrypt_rounds: int = 10
    frontend_url: str = "http://localhost:3000"
    mail_from: str = "Campus Canteen <noreply@canteen.local>"
    log_dir: str = "logs"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Build settings once per process from environment variables."""
    return Settings(
        environment=os.getenv("PROTEAN_ENV", "development").lower(),
        jwt_secret=os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET),
        jwt_expire_hours=int(os.getenv("JWT_EXPIRE_HOURS", "24")),
        reset_token_ttl_minutes=int(os.getenv("RESET_TOKEN_TTL_MINUTES", "60")),
        bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "10")),
        frontend_url=os.getenv("FRONTEND_URL", "http://localhost:3000"),
        mail_from=os.getenv("MAIL_FROM", "Campus Canteen <noreply@canteen.local>"),
        log_dir=os.getenv("LOG_DIR", "logs"),
    )
