"""Rendering of a validated mapping set into an nginx `server` block.

Jinja2 template in `adapters/templates/nginx.conf.j2`. The output is a pure
function of its inputs: no timestamps, no environment lookups.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from core.domain.models import MappingSet, ServerOptions


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
_TEMPLATE_NAME = "nginx.conf.j2"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def listen_address(server: ServerOptions) -> str:
    """`host:port` for the `listen` directive; IPv6 hosts get brackets."""

    host = server.listen_host
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    return f"{host}:{server.listen_port}"


def render(mappings: MappingSet, server: ServerOptions | None = None) -> str:
    """Render one `location` block per entry, in declaration order.

    `proxy_pass` carries the target's URI part, so nginx replaces the matched
    prefix and appends the rest of the request path (`/foo/bar` under
    `location /foo` reaches `http://upstream/foo/bar`).
    """

    server = server or ServerOptions()
    template = _get_env().get_template(_TEMPLATE_NAME)
    return template.render(
        server=server,
        listen=listen_address(server),
        mappings=mappings,
    )
