"""Command line entry point.

    nginx-rp-conf -r /foo:http://localhost:3000/foo -r /bar:http://localhost:4000/

Writes the nginx conf and then replaces itself with `nginx -g "daemon off;"`
(disable with `--no-exec`). Without any `-r` flag the mappings come from the
YAML file given by `--config-file` (default `/conf/config.yaml`).
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.nginx_launcher import NginxLauncher
from cli.ui_components import (
    log_level_for,
    print_error,
    print_summary,
    setup_logging,
)
from core.config import AppSettings
from core.domain.errors import InvalidSettings, ProxyConfError
from core.interfaces.launcher import ServerLauncher
from core.services.pipeline import generate

app = typer.Typer(
    add_completion=False,
    help="Generate a reverse-proxy nginx conf from path:url mappings, then start nginx.",
)

_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def build_launcher(settings: AppSettings) -> ServerLauncher:
    return NginxLauncher(settings.nginx_argv())


def _load_settings(overrides: dict[str, object]) -> AppSettings:
    # init kwargs take priority over NGINX_RP_* variables and .env
    try:
        return AppSettings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise InvalidSettings(f"{field}: {first['msg']}") from exc


@app.command()
def main(
    reverse_proxy: list[str] = typer.Option(
        None,
        "--reverse-proxy",
        "-r",
        help="Mapping, repeatable. eg. /path/to:http://localhost:3000/path/to",
        show_default=False,
    ),
    host: str | None = typer.Option(
        None, "--host", "-H", help="Listen address, such as 0.0.0.0, 127.0.0.1, 192.168.1.2."
    ),
    port: int | None = typer.Option(None, "--port", "-p", help="Listen port."),
    domain: str | None = typer.Option(
        None, "--domain", "-d", help="Virtual host. eg. localhost, example.com"
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        "-c",
        help="YAML file read when no --reverse-proxy is given. [default: /conf/config.yaml]",
    ),
    nginx_conf: Path | None = typer.Option(
        None,
        "--nginx-conf",
        "-o",
        help="nginx conf file to write. [default: /etc/nginx/conf.d/default.conf]",
    ),
    exec_nginx: bool = typer.Option(
        True, "--exec/--no-exec", help="Replace this process with nginx after writing."
    ),
    print_conf: bool = typer.Option(
        False, "--print", help="Also print the generated conf to stdout."
    ),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="-v info, -vv debug."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors."),
) -> None:
    """Generate the nginx conf and hand off to nginx."""

    setup_logging(_console, log_level_for(verbose, quiet))

    try:
        settings = _load_settings(
            {
                "config_file": config_file,
                "nginx_conf": nginx_conf,
                "host": host,
                "port": port,
                "domain": domain,
            }
        )
        logger.debug("settings: %s", settings)
        result = generate(settings=settings, cli_mappings=reverse_proxy)
    except ProxyConfError as exc:
        logger.debug("generation failed", exc_info=exc)
        print_error(_console, exc)
        raise typer.Exit(code=1) from exc

    if print_conf:
        typer.echo(result.rendered, nl=False)
    if not quiet:
        print_summary(_console, result, detailed=verbose >= 1)

    if not exec_nginx:
        return

    try:
        build_launcher(settings).launch(result.conf_path)
    except ProxyConfError as exc:
        logger.debug("handoff to nginx failed", exc_info=exc)
        print_error(_console, exc)
        raise typer.Exit(code=1) from exc


def run() -> None:
    app()
