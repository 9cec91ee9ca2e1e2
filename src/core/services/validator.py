"""Structural checks on a mapping set.

`validate` is a pure check: it returns its argument unchanged, so anything it
accepts can be rendered without further checks.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from core.domain.errors import DuplicatePath, InvalidPath, InvalidTargetURL
from core.domain.models import MappingEntry, MappingSet


ALLOWED_SCHEMES = ("http", "https")

# Characters that would end or corrupt an nginx directive; `$` starts a variable
# and `\` an escape.
_NGINX_SYNTAX_CHARS = frozenset(";{}\"'#$\\")


def _has_unsafe_chars(value: str) -> bool:
    return any(ch.isspace() or ch in _NGINX_SYNTAX_CHARS for ch in value)


def check_path(path: str) -> None:
    if not path:
        raise InvalidPath(path, "path is empty")
    if not path.startswith("/"):
        raise InvalidPath(path, "path must start with '/'")
    if _has_unsafe_chars(path):
        raise InvalidPath(path, "path contains whitespace or nginx syntax characters")


def check_target(entry: MappingEntry) -> None:
    target = entry.target
    if _has_unsafe_chars(target):
        raise InvalidTargetURL(
            entry.path, target, "URL contains whitespace or nginx syntax characters"
        )
    try:
        parts = urlsplit(target)
        # raises on a non-numeric or out-of-range port
        parts.port
    except ValueError as exc:
        raise InvalidTargetURL(entry.path, target, str(exc)) from exc

    if not parts.scheme:
        raise InvalidTargetURL(entry.path, target, "missing scheme (expected http or https)")
    if parts.scheme not in ALLOWED_SCHEMES:
        raise InvalidTargetURL(
            entry.path, target, f"unsupported scheme {parts.scheme!r} (expected http or https)"
        )
    if not parts.hostname:
        raise InvalidTargetURL(entry.path, target, "missing host")


def validate(mappings: MappingSet) -> MappingSet:
    """Check every entry in declaration order; the first failure wins."""

    seen: dict[str, MappingEntry] = {}
    for entry in mappings:
        check_path(entry.path)
        check_target(entry)
        previous = seen.get(entry.path)
        if previous is not None:
            raise DuplicatePath(entry.path, previous.target, entry.target)
        seen[entry.path] = entry
    return mappings
