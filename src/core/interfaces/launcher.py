"""Contract for the handoff to the downstream server.

- `launch` replaces the current process; a real implementation never returns.
- Kept as a Protocol so the CLI can be exercised with a recording fake.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Protocol, runtime_checkable


@runtime_checkable
class ServerLauncher(Protocol):
    """Minimal contract for starting the reverse-proxy server."""

    def launch(self, conf_path: Path) -> NoReturn:
        """Hand off to the server that loads `conf_path`."""

        ...
