import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL

REQUIRED_ENV_VARS = [
    "POSTGRES_HOST",
    "POSTGRES_PORT",
    "POSTGRES_DB",
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
]

DEFAULT_PORT = 5432


def load_environment(env_file: Optional[str] = None) -> Optional[Path]:
    """
    Load the dotenv file into os.environ.
    Variables already exported in the shell win over the file.
    """
    env_path = Path(env_file or os.getenv("VERIFY_ENV_FILE") or ".env").resolve()
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)
        return env_path

    print(f"Warning: env file not found at {env_path}")
    return None


def missing_env_vars(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Required variables that are unset or empty, in declaration order."""
    environ = os.environ if environ is None else environ
    return [name for name in REQUIRED_ENV_VARS if not environ.get(name)]


@dataclass(frozen=True)
class ConnectionConfig:
    """Connection settings for the PostgreSQL server under test."""
    host: Optional[str]
    port: int
    database: Optional[str]
    user: Optional[str]
    password: Optional[str]

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ConnectionConfig":
        environ = os.environ if environ is None else environ
        port = int(environ.get("POSTGRES_PORT") or DEFAULT_PORT)
        if not 1 <= port <= 65535:
            raise ValueError(f"port {port} is outside 1-65535")
        return cls(
            host=environ.get("POSTGRES_HOST"),
            port=port,
            database=environ.get("POSTGRES_DB"),
            user=environ.get("POSTGRES_USER"),
            password=environ.get("POSTGRES_PASSWORD"),
        )

    @property
    def url(self) -> URL:
        return URL.create(
            "postgresql+asyncpg",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )
