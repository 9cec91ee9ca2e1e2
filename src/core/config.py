"""Core configuration.

- Centralizes environment variables (pydantic-settings) without leaking them
  into the CLI layer.
- The pipeline receives an `AppSettings` instance explicitly; nothing here is
  read as a module-level global.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CONFIG_FILE = Path("/conf/config.yaml")
DEFAULT_NGINX_CONF = Path("/etc/nginx/conf.d/default.conf")
DEFAULT_NGINX_COMMAND = 'nginx -g "daemon off;"'


class AppSettings(BaseSettings):
    """Central application settings.

    Values left as `None` are resolved later: explicit CLI option, then the
    YAML file keys, then the `ServerOptions` defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="NGINX_RP_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    config_file: Path = Field(
        default=DEFAULT_CONFIG_FILE,
        description="YAML file read when no -r/--reverse-proxy flag is given.",
    )
    nginx_conf: Path | None = Field(
        default=None,
        description=f"nginx conf file to write (default {DEFAULT_NGINX_CONF}).",
    )
    host: str | None = Field(
        default=None,
        min_length=1,
        description="Listen address.",
    )
    port: int | None = Field(
        default=None,
        ge=1,
        le=65535,
        description="Listen port.",
    )
    domain: str | None = Field(
        default=None,
        min_length=1,
        description="Virtual host (server_name).",
    )
    nginx_command: str = Field(
        default=DEFAULT_NGINX_COMMAND,
        min_length=1,
        description="Shell-style command line that replaces this process once the conf is written.",
    )

    @field_validator("nginx_command")
    @classmethod
    def _check_command(cls, value: str) -> str:
        try:
            argv = shlex.split(value)
        except ValueError as exc:
            raise ValueError(f"cannot split command line: {exc}") from exc
        if not argv or not argv[0]:
            raise ValueError("command line names no program")
        return value

    def nginx_argv(self) -> list[str]:
        return shlex.split(self.nginx_command)
