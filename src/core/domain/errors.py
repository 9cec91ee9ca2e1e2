"""Error taxonomy for the generator.

Every error is terminal: the CLI reports `<kind>: <message>` and exits non-zero.
"""

from __future__ import annotations


class ProxyConfError(Exception):
    """Base class for every failure the generator reports to the operator."""

    kind = "ProxyConfError"

    @property
    def detail(self) -> str:
        return super().__str__()

    def __str__(self) -> str:
        return f"{self.kind}: {self.detail}" if self.detail else self.kind


class ConfigMissing(ProxyConfError):
    """Neither CLI flags nor the YAML file supplied any mapping."""

    kind = "ConfigMissing"


class MalformedMapping(ProxyConfError):
    """A `<path>:<url>` CLI token could not be split into a mapping."""

    kind = "MalformedMapping"

    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        super().__init__(f"{reason} in {token!r}")


class MalformedConfigFile(ProxyConfError):
    """The YAML file is unreadable, has invalid syntax or the wrong shape."""

    kind = "MalformedConfigFile"

    def __init__(self, path: str, location: str, reason: str) -> None:
        self.path = path
        self.location = location
        super().__init__(f"{path}: {location}: {reason}" if location else f"{path}: {reason}")


class InvalidPath(ProxyConfError):
    kind = "InvalidPath"

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"{path!r}: {reason}")


class InvalidTargetURL(ProxyConfError):
    kind = "InvalidTargetURL"

    def __init__(self, path: str, target: str, reason: str) -> None:
        self.path = path
        self.target = target
        super().__init__(f"{target!r} (for {path}): {reason}")


class DuplicatePath(ProxyConfError):
    """Two entries share the same path prefix."""

    kind = "DuplicatePath"

    def __init__(self, path: str, first_target: str, second_target: str) -> None:
        self.path = path
        self.first_target = first_target
        self.second_target = second_target
        super().__init__(f"{path} is mapped to both {first_target} and {second_target}")


class OutputWriteFailed(ProxyConfError):
    kind = "OutputWriteFailed"

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"{path}: {reason}")


class LaunchFailed(ProxyConfError):
    """nginx could not be exec'd after the config was written."""

    kind = "LaunchFailed"


class InvalidSettings(ProxyConfError):
    """Listen host/port/server name or an environment setting is unusable."""

    kind = "InvalidSettings"
