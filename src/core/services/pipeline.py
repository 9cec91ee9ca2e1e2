"""Generation pipeline: collect -> validate -> render -> write.

The CLI delegates all of the generation flow to `generate`, which keeps side
effects limited to the single file read and the single file write. Starting
nginx is deliberately not part of this module: the caller decides whether to
hand off once `generate` has returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from adapters.conf_writer import write_conf
from adapters.nginx_renderer import render
from core.config import DEFAULT_NGINX_CONF, AppSettings
from core.domain.errors import InvalidSettings
from core.domain.models import FileServerKeys, MappingSet, ServerOptions
from core.services.collector import collect
from core.services.validator import validate

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Output of a pipeline invocation."""

    conf_path: Path
    mappings: MappingSet
    server: ServerOptions
    rendered: str
    source: str


def resolve_server_options(settings: AppSettings, file_keys: FileServerKeys) -> ServerOptions:
    """Explicit settings (CLI/env) win over YAML keys, which win over defaults."""

    values: dict[str, object] = {}
    host = settings.host if settings.host is not None else file_keys.host
    port = settings.port if settings.port is not None else file_keys.port
    domain = settings.domain if settings.domain is not None else file_keys.domain
    if host is not None:
        values["listen_host"] = host
    if port is not None:
        values["listen_port"] = port
    if domain is not None:
        values["server_name"] = domain

    try:
        return ServerOptions(**values)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise InvalidSettings(f"{field}: {first['msg']}") from exc


def resolve_output_path(settings: AppSettings, file_keys: FileServerKeys) -> Path:
    if settings.nginx_conf is not None:
        return settings.nginx_conf
    if file_keys.nginx_conf:
        return Path(file_keys.nginx_conf)
    return DEFAULT_NGINX_CONF


def generate(*, settings: AppSettings, cli_mappings: Sequence[str] | None = None) -> GenerationResult:
    collected = collect(cli_mappings, settings.config_file)
    mappings = validate(collected.mappings)
    for entry in mappings:
        logger.debug("location %s -> %s", entry.path, entry.target)

    server = resolve_server_options(settings, collected.file_keys)
    conf_path = resolve_output_path(settings, collected.file_keys)
    logger.debug("server options: %s", server)

    rendered = render(mappings, server)
    write_conf(rendered, conf_path)
    return GenerationResult(
        conf_path=conf_path,
        mappings=mappings,
        server=server,
        rendered=rendered,
        source=collected.source,
    )
