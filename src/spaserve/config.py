"""Application configuration.

SPAConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from spaserve.errors import ConfigurationError

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


@dataclass(frozen=True, slots=True)
class SPAConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = SPAConfig(
            port=3000,
            asset_headers=(("Cache-Control", "public, max-age=31536000, immutable"),),
        )
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Reload (development mode, requires debug=True)
    reload_include: tuple[str, ...] = ()  # Extra extensions to watch (e.g. ".html", ".css")
    reload_dirs: tuple[str, ...] = ()  # Extra directories to watch alongside cwd

    # Routing
    index: str = "index.html"
    asset_headers: tuple[tuple[str, str], ...] = ()  # Staged on every static asset response

    # Directory stores built from a path
    follow_symlinks: bool = False

    # Logging
    log_level: str = "info"

    def validate(self) -> None:
        """Raise ConfigurationError if any field is unusable."""
        if not self.index or "/" in self.index or self.index in (".", ".."):
            msg = f"index must be a plain file name, got {self.index!r}"
            raise ConfigurationError(msg)
        if self.log_level.lower() not in LOG_LEVELS:
            msg = f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            raise ConfigurationError(msg)
        if not 0 <= self.port <= 65535:
            msg = f"port out of range: {self.port}"
            raise ConfigurationError(msg)
