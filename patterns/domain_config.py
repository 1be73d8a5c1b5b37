"""Dataclass-based domain configuration pattern.

The task tracker defines its limits, runtime settings and feature flags as a
frozen dataclass. This gives you:
- Type safety (IDE autocompletion, mypy checking)
- Default values (sensible out-of-the-box)
- Immutability (frozen=True prevents accidental mutation)
- Easy overrides (from env vars or test fixtures)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent


# ---------------------------------------------------------------------------
# Nested config sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidationLimits:
    """Field length limits enforced on create/update."""

    title_max_length: int = 100
    description_max_length: int = 500


@dataclass(frozen=True)
class ServerConfig:
    """Where and how the HTTP server listens."""

    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: tuple[str, ...] = ("*",)
    static_dir: Path = PROJECT_ROOT / "public"


# ---------------------------------------------------------------------------
# Top-level domain config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaskTrackerConfig:
    """Complete configuration for the task tracker.

    Usage::

        config = TaskTrackerConfig.from_env()
        app = create_app(config)
    """

    limits: ValidationLimits = field(default_factory=ValidationLimits)
    server: ServerConfig = field(default_factory=ServerConfig)

    environment: str = "development"
    version: str = "1.0.0"
    log_level: str = "INFO"

    # Feature flags
    seed_demo_tasks: bool = True
    serve_web_client: bool = True

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @classmethod
    def default(cls) -> "TaskTrackerConfig":
        """Create config with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "TASKS_") -> "TaskTrackerConfig":
        """Create config from environment variables.

        Example: TASKS_PORT=8080 TASKS_ENV=production
        """
        overrides = {}
        server = {}

        env = os.getenv(f"{prefix}ENV")
        if env:
            overrides["environment"] = env
        log_level = os.getenv(f"{prefix}LOG_LEVEL")
        if log_level:
            overrides["log_level"] = log_level.upper()
        seed = os.getenv(f"{prefix}SEED")
        if seed:
            overrides["seed_demo_tasks"] = seed.lower() == "true"

        host = os.getenv(f"{prefix}HOST")
        if host:
            server["host"] = host
        port = os.getenv(f"{prefix}PORT")
        if port:
            server["port"] = int(port)
        origins = os.getenv(f"{prefix}CORS_ORIGINS")
        if origins:
            server["cors_origins"] = tuple(
                o.strip() for o in origins.split(",") if o.strip()
            )
        static_dir = os.getenv(f"{prefix}STATIC_DIR")
        if static_dir:
            server["static_dir"] = Path(static_dir)

        if server:
            overrides["server"] = ServerConfig(**server)

        return cls(**overrides)
