"""Domain models (Pydantic v2).

These models describe *what* a reverse-proxy mapping is, not where it comes
from or how it is rendered. Structural checks that need a specific error kind
(path shape, URL scheme, duplicates) live in `core.services.validator`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class MappingEntry(BaseModel):
    """A single forwarding rule: requests under `path` go to `target`."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(
        ...,
        description="URL path prefix matched by the location block (e.g. '/foo').",
    )
    target: str = Field(
        ...,
        description="Upstream URL the prefix is proxied to (e.g. 'http://localhost:3000/foo').",
    )


# A single nginx token: no whitespace, quotes, comments, variables, escapes or delimiters.
_NGINX_TOKEN = "^[^\\s;{}\"'#$\\\\]+$"

# Declaration order (CLI flag order or YAML list order) is preserved.
MappingSet = tuple[MappingEntry, ...]


class ServerOptions(BaseModel):
    """Server-level values rendered around the location blocks."""

    model_config = ConfigDict(frozen=True)

    listen_host: str = Field(
        default="0.0.0.0",
        min_length=1,
        pattern=_NGINX_TOKEN,
        description="Listen address, such as 0.0.0.0, 127.0.0.1, 192.168.1.2.",
    )
    listen_port: int = Field(
        default=10080,
        ge=1,
        le=65535,
        description="Listen port.",
    )
    server_name: str = Field(
        default="localhost",
        min_length=1,
        pattern=_NGINX_TOKEN,
        description="Virtual host, e.g. localhost or example.com.",
    )


class FileServerKeys(BaseModel):
    """Optional server keys a YAML config file may carry next to `reverse_proxy`."""

    host: str | None = None
    port: int | None = None
    domain: str | None = None
    nginx_conf: str | None = None


class CollectedInput(BaseModel):
    """Result of input collection: entries plus where they came from."""

    model_config = ConfigDict(frozen=True)

    mappings: MappingSet
    source: str = Field(
        ...,
        description="'cli' or the path of the YAML file that supplied the entries.",
    )
    file_keys: FileServerKeys = Field(
        default_factory=FileServerKeys,
        description="Server keys read from the YAML file (empty when CLI flags were used).",
    )
