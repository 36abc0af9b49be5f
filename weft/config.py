"""Environment and project-file helpers shared by the commands."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


class ConfigError(Exception):
    """Raised when required configuration is missing or unreadable."""


def load_env(path: str | os.PathLike | None = None) -> None:
    """Load variables from a ``.env`` file without overriding existing ones."""
    env_path = Path(path) if path is not None else Path(".env")
    if not env_path.is_file():
        raise ConfigError("Error loading .env file")
    load_dotenv(env_path, override=False)


def get_migration_dir() -> str:
    """Return the migration directory named by ``MIGRATION_DIR``."""
    migration_dir = os.environ.get("MIGRATION_DIR", "")
    if not migration_dir:
        raise ConfigError("No migration directory provided.")
    try:
        os.listdir(migration_dir)
    except OSError as exc:
        raise ConfigError("The migration directory wasn't found.") from exc
    return migration_dir


def get_database_url() -> str:
    """Return the database URL named by ``PSQL_DSN``."""
    url = os.environ.get("PSQL_DSN", "")
    if not url:
        raise ConfigError("No database url provided.")
    return url


def create_file(path: str | os.PathLike, content: str) -> None:
    """Write ``content`` to ``path``, replacing any existing file."""
    Path(path).write_text(content, encoding="utf-8", newline="")


def get_module_path(path: str | os.PathLike = "go.mod") -> str:
    """Return the module path declared on the first line of a ``go.mod`` file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"failed to read go.mod: {exc}") from exc
    first_line = text.split("\n")[0]
    parts = first_line.split("module ")
    if len(parts) < 2:
        raise ConfigError("go.mod does not start with a module declaration")
    return parts[1]