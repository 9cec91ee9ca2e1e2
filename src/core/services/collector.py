"""Input collection: CLI flags first, the YAML file only as a fallback.

When at least one `-r/--reverse-proxy` flag is given the YAML file is never
opened, so a broken file cannot fail a run that does not use it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from adapters.config_file import load_config_file
from core.domain.errors import ConfigMissing, MalformedMapping
from core.domain.models import CollectedInput, FileServerKeys, MappingEntry

logger = logging.getLogger(__name__)

CLI_SOURCE = "cli"


def parse_mapping_token(token: str) -> MappingEntry:
    """Split `<path>:<url>` on the first `:`; the URL keeps its own colons."""

    path, separator, url = token.partition(":")
    if not separator:
        raise MalformedMapping(token, "missing separator ':'")
    if not path:
        raise MalformedMapping(token, "empty path")
    if not url:
        raise MalformedMapping(token, "empty URL")
    return MappingEntry(path=path, target=url)


def collect(cli_mappings: Sequence[str] | None, config_file: Path) -> CollectedInput:
    if cli_mappings:
        entries = tuple(parse_mapping_token(token) for token in cli_mappings)
        logger.info("using %d mapping(s) from the command line", len(entries))
        return CollectedInput(mappings=entries, source=CLI_SOURCE)

    if not config_file.is_file():
        raise ConfigMissing(
            f"no -r/--reverse-proxy flag given and no config file at {config_file}"
        )

    document = load_config_file(config_file)
    if not document.reverse_proxy:
        raise ConfigMissing(f"{config_file} defines no reverse_proxy entries")

    entries = tuple(
        MappingEntry(path=item.path, target=item.url) for item in document.reverse_proxy
    )
    logger.info("using %d mapping(s) from %s", len(entries), config_file)
    return CollectedInput(
        mappings=entries,
        source=str(config_file),
        file_keys=FileServerKeys(
            host=document.host,
            port=document.port,
            domain=document.domain,
            nginx_conf=document.nginx_conf,
        ),
    )
