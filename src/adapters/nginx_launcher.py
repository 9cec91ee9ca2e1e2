"""Handoff to nginx by process replacement.

`NginxLauncher.launch` only returns by raising: on success the Python process
image is gone and nginx runs in its place with the same PID (PID 1 in the
container).
"""

from __future__ import annotations

import logging
import os
import shlex
import sys
from pathlib import Path
from typing import NoReturn, Sequence

from core.domain.errors import LaunchFailed


logger = logging.getLogger(__name__)


class NginxLauncher:
    """`core.interfaces.launcher.ServerLauncher` backed by `os.execvp`."""

    def __init__(self, argv: Sequence[str]) -> None:
        if not argv:
            raise LaunchFailed("empty nginx command")
        self._argv = list(argv)

    @property
    def argv(self) -> list[str]:
        return list(self._argv)

    def launch(self, conf_path: Path) -> NoReturn:
        logger.info("starting %s (conf: %s)", shlex.join(self._argv), conf_path)
        # exec discards unflushed buffers
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            os.execvp(self._argv[0], self._argv)
        except OSError as exc:
            raise LaunchFailed(f"{self._argv[0]}: {exc.strerror or exc}") from exc
