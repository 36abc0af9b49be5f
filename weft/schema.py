"""Parsing of field specifications and generation of table migrations."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from string import Template

from .config import create_file, get_migration_dir
from .inflect import singularize

FIELD_PATTERN = re.compile(
    r"([a-zA-Z_][a-zA-Z0-9_]*):([a-zA-Z][a-zA-Z0-9_]*(?:\([0-9,\s]*\))?)([!^]{0,2})?(?:=(.*))?",
    re.ASCII,
)

SQL_TYPES = {
    "string": "VARCHAR(255)",
    "text": "TEXT",
    "int": "INTEGER",
    "int32": "INTEGER",
    "int64": "BIGINT",
    "float": "REAL",
    "float32": "REAL",
    "float64": "DOUBLE PRECISION",
    "bool": "BOOLEAN",
    "boolean": "BOOLEAN",
    "uuid": "UUID",
    "date": "DATE",
    "datetime": "TIMESTAMP",
    "time": "TIME",
    "json": "JSON",
    "jsonb": "JSONB",
    "bytea": "BYTEA",
    "serial": "SERIAL",
    "bigserial": "BIGSERIAL",
    "nanoid": "TEXT",
}

UP_TEMPLATE = Template("CREATE TABLE IF NOT EXISTS ${table_name} (\n    ${fields}\n);\n")
DOWN_TEMPLATE = Template("DROP TABLE IF EXISTS ${table_name};\n")

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


class SchemaError(ValueError):
    """Raised when a field specification cannot be parsed."""


@dataclass
class Field:
    """One column of a generated table."""

    name: str
    type: str
    is_unique: bool = False
    is_required: bool = False
    is_primary_key: bool = False
    default: str = ""
    is_reference: bool = False
    reference_field: str = ""


def extract_fields(specs) -> list[Field]:
    """Parse specs of the form ``name:type[!][^][=default]`` into fields."""
    fields = []
    for spec in specs:
        match = FIELD_PATTERN.fullmatch(spec)
        if match is None:
            raise SchemaError("Field format must be name:type[!][^][=default]")
        name, field_type, modifiers, value = match.groups()
        modifiers = modifiers or ""
        value = value or ""
        field = Field(
            name=name,
            type=field_type,
            is_required="!" in modifiers,
            is_unique="^" in modifiers,
        )
        if field_type == "reference":
            field.is_reference = True
            field.reference_field = value
            field.type = "text"
            field.name = f"{name}_id"
        elif value:
            field.default = value
        fields.append(field)
    return fields


def generate_sql_field(field: Field) -> str:
    """Render a single column definition."""
    parts = [f"{field.name} {SQL_TYPES.get(field.type, '')}"]
    if field.is_required:
        parts.append(" NOT NULL")
    if field.is_unique:
        parts.append(" UNIQUE")
    if field.is_primary_key:
        parts.append(" PRIMARY KEY")
    if field.default and not field.is_reference:
        parts.append(f" DEFAULT {field.default}")
    if field.is_reference:
        parts.append(f" REFERENCES {field.reference_field}(id)")
    return "".join(parts)


def generate_sql(table_name: str, fields) -> tuple[str, str]:
    """Return the up and down migration SQL for a table."""
    fields = list(fields)
    names = {field.name for field in fields}
    columns = []
    if "id" not in names:
        columns.append(
            generate_sql_field(
                Field(
                    name="id",
                    type="nanoid",
                    is_primary_key=True,
                    default=f"nanoid('{singularize(table_name)}_', 25)",
                )
            )
        )
    columns.extend(generate_sql_field(field) for field in fields)
    if "created_at" not in names:
        columns.append(generate_sql_field(Field(name="created_at", type="datetime", default="NOW()")))

    up = UP_TEMPLATE.substitute(table_name=table_name, fields=",\n    ".join(columns))
    down = DOWN_TEMPLATE.substitute(table_name=table_name)
    return up, down


def migration_file_names(table_name: str, timestamp: datetime) -> tuple[str, str]:
    """Return the up and down migration file names for a table."""
    stamp = timestamp.strftime(TIMESTAMP_FORMAT)
    return (
        f"{stamp}_create_{table_name}_table.up.sql",
        f"{stamp}_create_{table_name}_table.down.sql",
    )


def generate_migration_files(
    table_name: str,
    up_sql: str,
    down_sql: str,
    migration_dir: str | os.PathLike | None = None,
    now: datetime | None = None,
) -> tuple[Path, Path]:
    """Write the up and down migration files and return their paths."""
    directory = Path(migration_dir if migration_dir is not None else get_migration_dir())
    up_name, down_name = migration_file_names(table_name, now or datetime.now())
    up_path = directory / up_name
    down_path = directory / down_name
    create_file(up_path, up_sql)
    create_file(down_path, down_sql)
    return up_path, down_path