"""Loading of the YAML config file.

Expected shape (every key but `reverse_proxy` is optional):

    host: 0.0.0.0
    port: 10080
    domain: example.com
    nginx_conf: /etc/nginx/conf.d/default.conf
    reverse_proxy:
      - path: /foo
        url: http://localhost:3000/foo

Syntax and shape errors are reported as `MalformedConfigFile` with the field
location (e.g. `reverse_proxy.1.url`) or the line/column of the YAML error.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml  # type: ignore
from pydantic import BaseModel, Field, StrictStr, ValidationError
from pydantic.config import ConfigDict

from core.domain.errors import MalformedConfigFile


logger = logging.getLogger(__name__)


class ReverseProxyItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    path: StrictStr
    url: StrictStr


class ProxyConfigFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    host: StrictStr | None = None
    port: int | None = Field(default=None, ge=1, le=65535)
    domain: StrictStr | None = None
    nginx_conf: StrictStr | None = None
    reverse_proxy: list[ReverseProxyItem] | None = None


def _yaml_error_location(exc: yaml.YAMLError) -> str:
    mark = getattr(exc, "problem_mark", None)
    if mark is None:
        return ""
    return f"line {mark.line + 1}, column {mark.column + 1}"


def load_config_file(path: Path) -> ProxyConfigFile:
    """Read and parse `path`; an empty document yields an empty config."""

    logger.debug("reading config file %s", path)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedConfigFile(str(path), "", f"cannot read file: {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        problem = getattr(exc, "problem", None) or "invalid YAML syntax"
        raise MalformedConfigFile(str(path), _yaml_error_location(exc), problem) from exc

    if data is None:
        return ProxyConfigFile()
    if not isinstance(data, dict):
        raise MalformedConfigFile(
            str(path), "<document>", f"expected a mapping, got {type(data).__name__}"
        )

    try:
        return ProxyConfigFile.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "<document>"
        raise MalformedConfigFile(str(path), location, first["msg"]) from exc
