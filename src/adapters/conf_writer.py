"""Writing of the rendered configuration.

The file is replaced atomically (temporary file in the same directory, then
rename), so nginx never sees a half-written config.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path

from core.domain.errors import OutputWriteFailed


logger = logging.getLogger(__name__)


def write_conf(text: str, output_path: Path) -> Path:
    """Write `text` to `output_path`, creating parent directories."""

    tmp_path: Path | None = None
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent
        )
        tmp_path = Path(tmp_name)
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(text)
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, output_path)
    except OSError as exc:
        if tmp_path is not None:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
        raise OutputWriteFailed(str(output_path), exc.strerror or str(exc)) from exc

    logger.info("wrote %s (%d bytes)", output_path, len(text.encode("utf-8")))
    return output_path
