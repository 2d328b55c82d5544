"""Service configuration, read from the environment."""

import os
from dataclasses import dataclass, field

DEFAULT_JWT_SECRET = "your-secret-key-change-in-production"


def _split(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass(frozen=True)
class Settings:
    env: str = "development"
    log_level: str | None = None
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    port: int = 8000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        environ = os.environ if environ is None else environ
        env = (environ.get("ORDERS_ENV") or environ.get("ENVIRONMENT") or "development").lower()
        return cls(
            env=env,
            log_level=environ.get("LOG_LEVEL"),
            jwt_secret=environ.get("JWT_SECRET", DEFAULT_JWT_SECRET),
            jwt_algorithm=environ.get("JWT_ALGORITHM", "HS256"),
            port=int(environ.get("PORT", "8000")),
            cors_origins=_split(environ.get("CORS_ORIGINS", "*")),
        )

    @property
    def is_production(self) -> bool:
        return self.env == "production"
