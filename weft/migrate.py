"""Applying and reverting SQL migrations stored as numbered files."""

from __future__ import annotations

import os
import re
import sqlite3
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError

from .config import get_database_url, get_migration_dir

MIGRATIONS_TABLE = "schema_migrations"

_FILE_NAME = re.compile(r"^([0-9]+)_(.*)\.(down|up)\.(.*)$")
_NO_VERSION = -1
_DB_ERRORS = (SQLAlchemyError, sqlite3.Error)


class MigrationError(Exception):
    """Raised when migrations cannot be loaded or applied."""


@dataclass(frozen=True)
class Migration:
    """One numbered migration with its optional up and down scripts."""

    version: int
    name: str
    up: Path | None = None
    down: Path | None = None


def load_migrations(directory: str | os.PathLike) -> list[Migration]:
    """Read ``<version>_<name>.(up|down).<ext>`` files, ordered by version."""
    path = Path(directory)
    try:
        entries = sorted(path.iterdir())
    except OSError as exc:
        raise MigrationError(f"failed to read migrations from {path}: {exc}") from exc

    found: dict[int, dict] = {}
    for entry in entries:
        if not entry.is_file():
            continue
        match = _FILE_NAME.match(entry.name)
        if match is None:
            continue
        version, name, direction = int(match.group(1)), match.group(2), match.group(3)
        slot = found.setdefault(version, {"name": name})
        if direction in slot:
            raise MigrationError(f"duplicate migration file: {entry.name}")
        slot[direction] = entry

    return [
        Migration(version=version, name=slot["name"], up=slot.get("up"), down=slot.get("down"))
        for version, slot in sorted(found.items())
    ]


def _normalize_url(url: str) -> str:
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://") :]
    return url


class Migrator:
    """Tracks the applied version of a database and moves it up or down."""

    def __init__(self, migrations_dir: str | os.PathLike, url: str) -> None:
        self.migrations = load_migrations(migrations_dir)
        try:
            self._engine = create_engine(_normalize_url(url))
        except (SQLAlchemyError, ImportError) as exc:
            raise MigrationError(f"failed to open database: {exc}") from exc
        try:
            with self._engine.begin() as conn:
                conn.exec_driver_sql(
                    f"CREATE TABLE IF NOT EXISTS {MIGRATIONS_TABLE} "
                    "(version BIGINT NOT NULL PRIMARY KEY, dirty BOOLEAN NOT NULL)"
                )
        except _DB_ERRORS as exc:
            self._engine.dispose()
            raise MigrationError(f"failed to prepare {MIGRATIONS_TABLE}: {exc}") from exc

    def version(self) -> tuple[int, bool] | None:
        """Return ``(version, dirty)``, or None when nothing has been applied."""
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    text(f"SELECT version, dirty FROM {MIGRATIONS_TABLE} LIMIT 1")
                ).first()
        except _DB_ERRORS as exc:
            raise MigrationError(f"failed to read version: {exc}") from exc
        if row is None:
            return None
        version, dirty = int(row[0]), bool(row[1])
        if version == _NO_VERSION and not dirty:
            return None
        return version, dirty

    def up(self) -> list[int]:
        """Apply every pending migration and return the versions applied."""
        current = self._checked_version()
        applied = []
        for migration in self.migrations:
            if current is not None and migration.version <= current:
                continue
            self._apply(migration.up, migration.version)
            applied.append(migration.version)
        return applied

    def down(self) -> list[int]:
        """Revert every applied migration and return the versions reverted."""
        current = self._checked_version()
        if current is None:
            return []
        older = [m for m in self.migrations if m.version <= current]
        previous = [None, *(m.version for m in older[:-1])]
        reverted = []
        for migration, target in reversed(list(zip(older, previous))):
            self._apply(migration.down, target)
            reverted.append(migration.version)
        return reverted

    def close(self) -> None:
        """Release the database connections."""
        self._engine.dispose()

    def __enter__(self) -> Migrator:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _checked_version(self) -> int | None:
        state = self.version()
        if state is None:
            return None
        version, dirty = state
        if dirty:
            raise MigrationError(f"Dirty database version {version}. Fix and force version.")
        if version not in {m.version for m in self.migrations}:
            raise MigrationError(f"no migration found for version {version}")
        return version

    def _set_version(self, version: int | None, dirty: bool) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(text(f"DELETE FROM {MIGRATIONS_TABLE}"))
                if version is not None or dirty:
                    conn.execute(
                        text(f"INSERT INTO {MIGRATIONS_TABLE} (version, dirty) VALUES (:v, :d)"),
                        {"v": _NO_VERSION if version is None else version, "d": dirty},
                    )
        except _DB_ERRORS as exc:
            raise MigrationError(f"failed to set version: {exc}") from exc

    def _run_script(self, script: Path) -> None:
        sql = script.read_text(encoding="utf-8")
        if not sql.strip():
            return
        with self._engine.begin() as conn:
            if conn.dialect.name == "sqlite":
                conn.connection.dbapi_connection.executescript(sql)
            else:
                conn.exec_driver_sql(sql)

    def _apply(self, script: Path | None, target: int | None) -> None:
        self._set_version(target, True)
        if script is not None:
            try:
                self._run_script(script)
            except (*_DB_ERRORS, OSError) as exc:
                raise MigrationError(f"migration failed in {script.name}: {exc}") from exc
        self._set_version(target, False)


def create_migrator() -> Migrator:
    """Build a migrator from ``MIGRATION_DIR`` and ``PSQL_DSN``."""
    migration_dir = Path(get_migration_dir()).resolve()
    return Migrator(migration_dir, get_database_url())