"""Service configuration read from the environment and optional .env files."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_ENV_FILES = ("../../.env", "../.env", ".env")

_PG_PASS_ENV = "POSTGRES_PASS"


def _env(default: object = "", name: Optional[str] = None) -> object:
    """Declare a setting; without a name the variable is the upper-cased field name."""
    return field(default=default, metadata={"env": name})


@dataclass
class Config:
    env: str = _env("local")
    port: int = _env(8080)
    db_host: str = _env(name="POSTGRES_HOST")
    db_user: str = _env(name="POSTGRES_USER")
    db_password: str = _env(name=_PG_PASS_ENV)
    db_name: str = _env(name="POSTGRES_DB")
    db_port: int = _env(0, name="POSTGRES_PORT")
    payment_url: str = _env()
    payment_auth_token: str = _env()
    customer_url: str = _env()
    product_url: str = _env()
    order_topic_arn: str = _env()
    production_order_queue_url: str = _env()
    aws_access_key_id: str = _env()
    aws_secret_access_key: str = _env()
    aws_session_token: str = _env()
    aws_region: str = _env()
    aws_use_credentials: str = _env("false")


def load_env_config() -> Config:
    """Load .env files (without overriding the environment) and build the Config.

    Raises ValueError when an integer setting cannot be parsed.
    """
    for path in _ENV_FILES:
        if os.path.exists(path):
            load_dotenv(path, override=False)

    values: dict[str, object] = {}
    for f in fields(Config):
        name = f.metadata["env"] or f.name.upper()
        raw = os.environ.get(name, "")
        if raw == "":
            continue
        if isinstance(f.default, int):
            try:
                values[f.name] = int(raw.strip())
            except ValueError as exc:
                raise ValueError(f"invalid integer for {name}: {raw!r}") from exc
        else:
            values[f.name] = raw

    logger.info("Success on read .env configuration...")
    return Config(**values)