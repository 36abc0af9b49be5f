import pytest

from weft.config import ConfigError
from weft.domain import DomainContext, domain_context, generate_domain, render


@pytest.fixture
def project(tmp_path):
    (tmp_path / "go.mod").write_text("module example.com/app\n\ngo 1.24.5\n")
    (tmp_path / "internal").mkdir()
    return tmp_path


def test_domain_context_names():
    context = domain_context("user", "example.com/app")
    assert context.domain_plural == "Users"
    assert context.domain_upper == "User"
    assert context.plural == context.domain_upper
    assert context.package_name == "user"
    assert context.module_path == "example.com/app"


def test_render_fields_from_mapping():
    assert render("package {{.PackageName}}", {"PackageName": "user"}) == "package user"


def test_render_fields_from_context():
    context = DomainContext("a", "b", "c", "d", "e", "f")
    assert render("{{ .ModulePath }}/{{.DomainUpper}}", context) == "d/e"


def test_render_trim_markers():
    assert render("x  {{- .Name -}}  y", {"Name": "z"}) == "xzy"


def test_render_comment_is_dropped():
    assert render("a{{/* note */}}b", {}) == "ab"


def test_render_unknown_field():
    with pytest.raises(ValueError):
        render("{{.Missing}}", {"Name": "z"})


def test_render_unsupported_action():
    with pytest.raises(ValueError):
        render("{{range .Items}}", {"Items": "z"})


def test_generate_domain_writes_files(project):
    handler_path, service_path = generate_domain(
        "user",
        "package {{.PackageName}}\n\n// {{.ModulePath}}\n",
        "type {{.DomainUpper}}Service struct{}\n",
        project,
    )
    assert handler_path == project / "internal" / "user" / "handler.go"
    assert handler_path.read_text() == "package user\n\n// example.com/app\n"
    assert service_path.read_text() == "type UserService struct{}\n"


def test_generate_domain_requires_internal(tmp_path):
    (tmp_path / "go.mod").write_text("module example.com/app\n")
    with pytest.raises(ConfigError, match="No internal directory found."):
        generate_domain("user", "", "", tmp_path)


def test_generate_domain_requires_go_mod(tmp_path):
    (tmp_path / "internal").mkdir()
    with pytest.raises(ConfigError):
        generate_domain("user", "", "", tmp_path)


def test_generate_domain_bad_template_writes_nothing(project):
    with pytest.raises(ValueError):
        generate_domain("user", "{{.Nope}}", "", project)
    assert not (project / "internal" / "user").exists()