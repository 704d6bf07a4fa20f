"""
Service configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass, field
from typing import List

STORE_MEMORY = "memory"
STORE_SQL = "sql"


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class Settings:
    """Runtime settings for the TrackP service."""
    store: str = STORE_MEMORY
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    demo_data: bool = False

    # Relational backend
    db_type: str = "postgresql"
    db_host: str = "localhost"
    db_port: str = "5432"
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "trackp"
    db_path: str = "trackp.db"
    db_pool_min: int = 1
    db_pool_max: int = 10

    @property
    def dsn(self) -> str:
        """Connection string for the configured relational database."""
        if self.db_type == "sqlite":
            return self.db_path
        from psycopg2.extensions import make_dsn

        # make_dsn quotes values containing spaces or quotes
        return make_dsn(
            host=self.db_host,
            port=self.db_port,
            dbname=self.db_name,
            user=self.db_user,
            password=self.db_password,
        )


def load_settings() -> Settings:
    """
    Build settings from the environment.

    Every value has a hardcoded default so the service starts with no
    configuration at all (in-memory store on port 8080).
    """
    store = os.getenv("TRACKP_STORE", STORE_MEMORY).lower()
    if store not in (STORE_MEMORY, STORE_SQL):
        raise ValueError(f"Invalid TRACKP_STORE '{store}'. Must be one of: {STORE_MEMORY}, {STORE_SQL}")

    db_type = os.getenv("DB_TYPE", "postgresql").lower()
    if db_type not in ("postgresql", "sqlite"):
        raise ValueError(f"Invalid DB_TYPE '{db_type}'. Must be one of: postgresql, sqlite")

    return Settings(
        store=store,
        host=os.getenv("TRACKP_HOST", "0.0.0.0"),
        port=int(os.getenv("TRACKP_PORT", "8080")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=_env_list("TRACKP_CORS_ORIGINS", "http://localhost:3000"),
        demo_data=_env_bool("TRACKP_DEMO_DATA"),
        db_type=db_type,
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=os.getenv("DB_PORT", "5432"),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "trackp"),
        db_path=os.getenv("TRACKP_DB_PATH", "trackp.db"),
        db_pool_min=int(os.getenv("DB_POOL_MIN", "1")),
        db_pool_max=int(os.getenv("DB_POOL_MAX", "10")),
    )
