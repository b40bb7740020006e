"""Configuration models and loading."""

import json
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.exceptions import ConfigurationError

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/128.0.0.0 Safari/537.36"
)

# Environment variable -> Config field
ENV_FIELDS = {
    "PASSWORD": "secret",
    "CACHE_TTL": "cache_ttl_seconds",
    "MAX_RECURSION": "max_recursion",
    "USER_AGENTS_JSON": "user_agents",
    "DEBUG": "debug",
    "HOST": "host",
    "PORT": "port",
    "STATIC_DIR": "static_dir",
    "STATIC_MANIFEST": "static_manifest",
    "UPSTREAM_TIMEOUT": "upstream_timeout",
}


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    secret: str = ""
    cache_ttl_seconds: int = Field(default=86400, ge=0)
    max_recursion: int = Field(default=5, ge=0)
    user_agents: tuple[str, ...] = (DEFAULT_USER_AGENT,)
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8787
    static_dir: Path = Path("public")
    static_manifest: Path | None = None
    upstream_timeout: float = Field(default=60.0, gt=0)

    @field_validator("user_agents")
    @classmethod
    def _require_user_agents(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("at least one user agent is required")
        for agent in value:
            try:
                agent.encode("latin-1")
            except UnicodeEncodeError as e:
                raise ValueError(f"user agent {agent!r} is not a valid header value") from e
        return value

    @property
    def proxy_enabled(self) -> bool:
        return bool(self.secret)


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Build the configuration from environment variables."""
    if environ is None:
        environ = os.environ

    data: dict[str, object] = {}
    for env_name, field_name in ENV_FIELDS.items():
        raw = environ.get(env_name)
        if raw is None or raw == "":
            continue
        if env_name == "USER_AGENTS_JSON":
            try:
                data[field_name] = json.loads(raw)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"USER_AGENTS_JSON is not valid JSON: {e}") from e
        elif env_name == "DEBUG":
            # Only the literal "true" enables debug output
            data[field_name] = raw == "true"
        else:
            data[field_name] = raw

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid gateway configuration: {e}") from e
