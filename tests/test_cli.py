import sqlite3

import pytest

from weft.cli import main
from weft.schema import generate_sql, extract_fields


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("MIGRATION_DIR", "PSQL_DSN"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return tmp_path


def _tables(path):
    conn = sqlite3.connect(path)
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    finally:
        conn.close()
    return {row[0] for row in rows}


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage:" in capsys.readouterr().out


def test_gen_alone_does_nothing(capsys):
    assert main(["gen"]) == 0
    assert capsys.readouterr().out == ""


def test_schema_requires_fields():
    with pytest.raises(SystemExit):
        main(["gen", "schema", "users"])


def test_schema_writes_migrations(workdir, capsys):
    (workdir / "migrations").mkdir()
    (workdir / ".env").write_text("MIGRATION_DIR=migrations\n")
    assert main(["gen", "schema", "users", "email:string!^"]) == 0
    up_files = list((workdir / "migrations").glob("*_create_users_table.up.sql"))
    down_files = list((workdir / "migrations").glob("*_create_users_table.down.sql"))
    assert len(up_files) == 1 and len(down_files) == 1
    expected_up, expected_down = generate_sql("users", extract_fields(["email:string!^"]))
    assert up_files[0].read_text() == expected_up
    assert down_files[0].read_text() == expected_down
    assert expected_up in capsys.readouterr().out


def test_schema_bad_field(workdir, capsys):
    (workdir / "migrations").mkdir()
    (workdir / ".env").write_text("MIGRATION_DIR=migrations\n")
    assert main(["gen", "schema", "users", "bad-field"]) == 1
    assert "Field format must be name:type[!][^][=default]" in capsys.readouterr().err


def test_schema_without_env_file(workdir, capsys):
    assert main(["gen", "schema", "users", "email:string"]) == 1
    assert "Error loading .env file" in capsys.readouterr().err


def test_create_copies_template(workdir, capsys):
    template = workdir / "repo" / "templates" / "gin_postgres_htmx"
    template.mkdir(parents=True)
    (template / "Makefile").write_text("all: build test\n")
    assert main(["create", "demo", "--repository", str(workdir / "repo")]) == 0
    assert (workdir / "demo" / "Makefile").read_text() == "all: build test\n"
    assert "Created project!" in capsys.readouterr().out


def test_create_empty_name(workdir, capsys):
    assert main(["create", ""]) == 1
    assert "provide a project name" in capsys.readouterr().err


def test_domain_generates_files(workdir, capsys):
    (workdir / "go.mod").write_text("module example.com/app\n")
    (workdir / "internal").mkdir()
    (workdir / "handler.tmpl").write_text("package {{.PackageName}}\n")
    (workdir / "service.tmpl").write_text("// {{.DomainPlural}}\n")
    args = ["gen", "domain", "user", "--handler-template", "handler.tmpl", "--service-template", "service.tmpl"]
    assert main(args) == 0
    assert (workdir / "internal" / "user" / "handler.go").read_text() == "package user\n"
    assert (workdir / "internal" / "user" / "service.go").read_text() == "// Users\n"
    assert "Created domain files!" in capsys.readouterr().out


def test_migrate_up_and_down(workdir, capsys):
    migrations = workdir / "migrations"
    migrations.mkdir()
    (migrations / "1_create_items.up.sql").write_text("CREATE TABLE items (id INTEGER);\n")
    (migrations / "1_create_items.down.sql").write_text("DROP TABLE items;\n")
    (workdir / ".env").write_text("MIGRATION_DIR=migrations\nPSQL_DSN=sqlite:///app.db\n")

    assert main(["migrate", "up"]) == 0
    assert "items" in _tables(workdir / "app.db")
    assert main(["migrate", "up"]) == 0
    assert "Up migrations applied successfully" in capsys.readouterr().out

    assert main(["migrate", "down"]) == 0
    assert "items" not in _tables(workdir / "app.db")


def test_migrate_without_database_url(workdir, capsys):
    (workdir / "migrations").mkdir()
    (workdir / ".env").write_text("MIGRATION_DIR=migrations\n")
    assert main(["migrate", "up"]) == 1
    assert "No database url provided." in capsys.readouterr().err