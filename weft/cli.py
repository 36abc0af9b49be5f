"""Command-line entry point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_env
from .domain import generate_domain
from .migrate import MigrationError, create_migrator
from .project import DEFAULT_TEMPLATE, create_project
from .schema import SchemaError, extract_fields, generate_migration_files, generate_sql

_ERRORS = (ConfigError, SchemaError, MigrationError, OSError, ValueError)


def _nothing(args: argparse.Namespace) -> int:
    return 0


def _create(args: argparse.Namespace) -> int:
    print("Creating project....")
    if not args.name:
        raise ValueError("provide a project name")
    create_project(args.name, args.template, args.repository)
    print("Created project!")
    return 0


def _domain(args: argparse.Namespace) -> int:
    handler_template = Path(args.handler_template).read_text(encoding="utf-8")
    service_template = Path(args.service_template).read_text(encoding="utf-8")
    generate_domain(args.name, handler_template, service_template, args.root)
    print("Created domain files!")
    return 0


def _schema(args: argparse.Namespace) -> int:
    load_env()
    fields = extract_fields(args.fields)
    up_sql, down_sql = generate_sql(args.table, fields)
    print(up_sql, down_sql)
    generate_migration_files(args.table, up_sql, down_sql)
    return 0


def _migrate(direction: str):
    def run(args: argparse.Namespace) -> int:
        load_env()
        try:
            migrator = create_migrator()
        except MigrationError as exc:
            raise MigrationError(f"Failed to create migrator: {exc}") from exc
        with migrator:
            try:
                if direction == "up":
                    migrator.up()
                else:
                    migrator.down()
            except MigrationError as exc:
                raise MigrationError(f"Failed to run {direction} migrations: {exc}") from exc
        print(f"{direction.capitalize()} migrations applied successfully")
        return 0

    return run


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weft",
        description="Create projects, generate code and run database migrations.",
    )
    parser.add_argument("-t", "--toggle", action="store_true", help="Help message for toggle")
    commands = parser.add_subparsers(dest="command")

    create = commands.add_parser("create", help="create a project from a template")
    create.add_argument("name")
    create.add_argument("--template", default=DEFAULT_TEMPLATE)
    create.add_argument("--repository", default=".", help="directory holding templates/")
    create.set_defaults(handler=_create)

    gen = commands.add_parser("gen", help="generate code")
    gen.set_defaults(handler=_nothing)
    generators = gen.add_subparsers(dest="generator")

    domain = generators.add_parser("domain", help="generate handler and service files")
    domain.add_argument("name")
    domain.add_argument("--handler-template", required=True)
    domain.add_argument("--service-template", required=True)
    domain.add_argument("--root", default=".")
    domain.set_defaults(handler=_domain)

    schema = generators.add_parser("schema", help="generate a table migration")
    schema.add_argument("table")
    schema.add_argument("fields", nargs="+", metavar="name:type[!][^][=default]")
    schema.set_defaults(handler=_schema)

    migrate = commands.add_parser("migrate", help="run database migrations")
    migrate.set_defaults(handler=_nothing)
    steps = migrate.add_subparsers(dest="step")
    steps.add_parser("up", help="apply all pending migrations").set_defaults(handler=_migrate("up"))
    steps.add_parser("down", help="revert all migrations").set_defaults(handler=_migrate("down"))
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0
    try:
        return handler(args)
    except _ERRORS as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())