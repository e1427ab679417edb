# --- Indexer configuration ---------------------------------------------------
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from api_index.src.api_index.errors import ConfigError

COLLISION_POLICIES = ("replace", "error")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class IndexerConfig:
    """
    Knobs for a single indexing run. Defaults match the behaviour most Spring
    style code bases expect: any `*Mapping` annotation marks an endpoint.
    """
    api_marker: str = "Mapping"
    file_suffix: str = ".java"
    exclude_dirs: frozenset[str] = field(
        default_factory=lambda: frozenset({".git", "target", "build", "out", "node_modules"})
    )
    on_collision: str = "replace"
    log_level: str = "INFO"

    def __post_init__(self):
        if not self.api_marker:
            raise ConfigError("api_marker must not be empty")
        if not self.file_suffix.startswith("."):
            raise ConfigError(f"file_suffix must start with '.': {self.file_suffix!r}")
        if self.on_collision not in COLLISION_POLICIES:
            raise ConfigError(
                f"on_collision must be one of {COLLISION_POLICIES}, got {self.on_collision!r}"
            )
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"unknown log level {self.log_level!r}")
        # logging.basicConfig only accepts upper-case level names
        object.__setattr__(self, "log_level", self.log_level.upper())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "IndexerConfig":
        """
        Builds a config from API_INDEX_* environment variables, falling back to
        the defaults for anything unset.
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        if env.get("API_INDEX_MARKER"):
            kwargs["api_marker"] = env["API_INDEX_MARKER"]
        if env.get("API_INDEX_SUFFIX"):
            kwargs["file_suffix"] = env["API_INDEX_SUFFIX"]
        if env.get("API_INDEX_EXCLUDE"):
            kwargs["exclude_dirs"] = frozenset(
                part.strip() for part in env["API_INDEX_EXCLUDE"].split(",") if part.strip()
            )
        if env.get("API_INDEX_ON_COLLISION"):
            kwargs["on_collision"] = env["API_INDEX_ON_COLLISION"].strip().lower()
        if env.get("API_INDEX_LOG_LEVEL"):
            kwargs["log_level"] = env["API_INDEX_LOG_LEVEL"].strip().upper()
        return cls(**kwargs)
