"""Generation of handler and service files for a new domain."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path

from .config import ConfigError, create_file, get_module_path
from .inflect import pluralize, singularize, title


def _name(template_name: str):
    return field(metadata={"template": template_name})


@dataclass(frozen=True)
class DomainContext:
    """Values made available to the domain templates."""

    package_name: str = _name("PackageName")
    domain_plural: str = _name("DomainPlural")
    domain_name: str = _name("DomainName")
    module_path: str = _name("ModulePath")
    domain_upper: str = _name("DomainUpper")
    plural: str = _name("Plural")


def domain_context(name: str, module_path: str) -> DomainContext:
    """Build the template values for the domain ``name``."""
    return DomainContext(
        package_name=name,
        domain_plural=title(pluralize(name)),
        domain_name=name,
        module_path=module_path,
        domain_upper=title(singularize(name)),
        plural=title(name),
    )


_ACTION = re.compile(r"\{\{(-\s)?\s*(.*?)\s*(\s-)?\}\}", re.DOTALL)
_FIELD = re.compile(r"\.([A-Za-z_]\w*)")


def _values(context) -> dict[str, object]:
    if is_dataclass(context) and not isinstance(context, type):
        return {f.metadata.get("template", f.name): getattr(context, f.name) for f in fields(context)}
    if isinstance(context, Mapping):
        return dict(context)
    raise TypeError("template context must be a dataclass or a mapping")


def _evaluate(expression: str, values: dict[str, object]) -> str:
    if expression.startswith("/*") and expression.endswith("*/"):
        return ""
    match = _FIELD.fullmatch(expression)
    if match is None:
        raise ValueError(f"unsupported template action: {{{{{expression}}}}}")
    key = match.group(1)
    if key not in values:
        raise ValueError(f"can't evaluate field {key}")
    return str(values[key])


def render(template: str, context) -> str:
    """Fill ``{{.Field}}`` actions, honouring ``{{-`` and ``-}}`` trim markers."""
    values = _values(context)
    parts = []
    position = 0
    trim_next = False
    for match in _ACTION.finditer(template):
        chunk = template[position : match.start()]
        if trim_next:
            chunk = chunk.lstrip()
        if match.group(1):
            chunk = chunk.rstrip()
        parts.append(chunk)
        parts.append(_evaluate(match.group(2), values))
        trim_next = bool(match.group(3))
        position = match.end()
    tail = template[position:]
    parts.append(tail.lstrip() if trim_next else tail)
    return "".join(parts)


def generate_domain(
    name: str,
    handler_template: str,
    service_template: str,
    root: str | os.PathLike = ".",
) -> tuple[Path, Path]:
    """Write ``internal/<name>/handler.go`` and ``service.go`` and return their paths."""
    base = Path(root)
    context = domain_context(name, get_module_path(base / "go.mod"))
    handler = render(handler_template, context)
    service = render(service_template, context)

    if not (base / "internal").is_dir():
        raise ConfigError("No internal directory found.")
    directory = base / "internal" / name
    try:
        directory.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(f"Error creating directory: {exc}") from exc

    handler_path = directory / "handler.go"
    service_path = directory / "service.go"
    create_file(handler_path, handler)
    create_file(service_path, service)
    return handler_path, service_path