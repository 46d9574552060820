from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _load_repo_env() -> None:
    """Load the nearest .env starting from this file upward."""
    current = Path(__file__).resolve()
    for candidate in [current.parent, *current.parents]:
        env_file = candidate / ".env"
        if env_file.exists():
            load_dotenv(env_file)
            return


_load_repo_env()


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if value is None or value == "":
        raise ValueError(f"Environment variable {name} is required")
    return value


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer") from exc


def _optional_env(name: str) -> str | None:
    return os.getenv(name) or None


@dataclass(frozen=True)
class UsersConfig:
    table_name: str
    name_index: str
    region: str
    endpoint_url: str | None = None
    access_key: str | None = None
    secret_key: str | None = None
    list_default_limit: int = 10
    list_max_limit: int = 100
    log_level: str = "INFO"
    server_host: str = "0.0.0.0"
    server_port: int = 8000


def load_config() -> UsersConfig:
    return UsersConfig(
        table_name=_require_env("USERS_TABLE_NAME"),
        name_index=os.getenv("USERS_NAME_INDEX", "nameIndex"),
        region=os.getenv("USERS_DYNAMODB_REGION", "us-east-1"),
        endpoint_url=_optional_env("USERS_DYNAMODB_ENDPOINT_URL"),
        access_key=_optional_env("USERS_DYNAMODB_ACCESS_KEY"),
        secret_key=_optional_env("USERS_DYNAMODB_SECRET_KEY"),
        list_default_limit=_env_int("USERS_LIST_DEFAULT_LIMIT", 10),
        list_max_limit=_env_int("USERS_LIST_MAX_LIMIT", 100),
        log_level=os.getenv("USERS_LOG_LEVEL", "INFO").upper(),
        server_host=os.getenv("USERS_SERVER_HOST", "0.0.0.0"),
        server_port=_env_int("USERS_SERVER_PORT", 8000),
    )
