"""Frontend configuration.

FrontendConfig is a frozen dataclass: loaded once at startup, passed into
the router, immutable afterwards. The custom frontend URL is classified
into one of three override variants when the config is created, so request
handling only ever matches on a variant and never re-reads the process
command line.
"""

import argparse
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TypeAlias
from urllib.parse import urlsplit

from perch.errors import ConfigurationError

logger = logging.getLogger("perch.config")

CUSTOM_FRONTEND_SWITCH = "--custom-devtools-frontend"
CUSTOM_FRONTEND_ENV = "PERCH_CUSTOM_DEVTOOLS_FRONTEND"


@dataclass(frozen=True, slots=True)
class NoOverride:
    """Serve everything from the bundle."""


@dataclass(frozen=True, slots=True)
class FileOverride:
    """Serve from a local directory given as a ``file:`` URL."""

    url: str


@dataclass(frozen=True, slots=True)
class RemoteOverride:
    """Serve from a remote base URL. Recognized, not fetched."""

    url: str


Override: TypeAlias = NoOverride | FileOverride | RemoteOverride


def parse_override(value: str | None) -> Override:
    """Classify a custom frontend URL.

    Empty values and values without a scheme (``/opt/frontend``) are not
    URLs and leave the bundle in charge.
    """
    if not value:
        return NoOverride()
    try:
        scheme = urlsplit(value).scheme.lower()
    except ValueError:
        scheme = ""
    if not scheme:
        logger.warning("Ignoring custom frontend %r: not an absolute URL", value)
        return NoOverride()
    if scheme == "file":
        return FileOverride(value)
    return RemoteOverride(value)


@dataclass(frozen=True, slots=True)
class FrontendConfig:
    """Frontend configuration. Immutable after creation.

    All fields have defaults::

        config = FrontendConfig(custom_frontend="file:///opt/frontend")
    """

    # Override source (None = bundled resources only)
    custom_frontend: str | None = None

    # Mount segment every handled request path starts with
    bundled_path: str = "bundled"

    # Concurrent blocking file reads
    max_file_readers: int = 10

    override: Override = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.bundled_path.strip("/"):
            raise ConfigurationError("bundled_path cannot be empty")
        if "/" in self.bundled_path.strip("/"):
            raise ConfigurationError(
                f"bundled_path must be a single path segment, got: {self.bundled_path!r}"
            )
        if self.max_file_readers < 1:
            raise ConfigurationError(
                f"max_file_readers must be at least 1, got: {self.max_file_readers}"
            )
        object.__setattr__(self, "override", parse_override(self.custom_frontend))

    @property
    def bundled_prefix(self) -> str:
        """The mount segment followed by ``/``."""
        return self.bundled_path.strip("/") + "/"

    @classmethod
    def from_command_line(
        cls,
        argv: Sequence[str] | None = None,
        environ: Mapping[str, str] | None = None,
        **overrides: object,
    ) -> "FrontendConfig":
        """Build a config from the process switches and environment.

        ``--custom-devtools-frontend=<url>`` wins over the
        ``PERCH_CUSTOM_DEVTOOLS_FRONTEND`` environment variable. Unrelated
        arguments are ignored.
        """
        argv = sys.argv[1:] if argv is None else argv
        environ = os.environ if environ is None else environ

        value = custom_frontend_switch(argv)
        if value is None:
            value = environ.get(CUSTOM_FRONTEND_ENV) or None
        return cls(custom_frontend=value, **overrides)  # type: ignore[arg-type]


def custom_frontend_switch(argv: Sequence[str]) -> str | None:
    """Return the value of ``--custom-devtools-frontend`` in *argv*, if any.

    Raises:
        ConfigurationError: If the switch is present without a value.
    """
    parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False, exit_on_error=False)
    parser.add_argument(CUSTOM_FRONTEND_SWITCH, dest="custom_frontend", default=None)
    try:
        namespace, _ = parser.parse_known_args(list(argv))
    except argparse.ArgumentError as exc:
        raise ConfigurationError(str(exc)) from exc
    return namespace.custom_frontend
