"""Project templating, domain and schema code generation, and SQL migrations."""

__version__ = "0.1.0"
__all__ = ["__version__"]