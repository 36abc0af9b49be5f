[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "weft"
version = "0.1.0"
description = "Project scaffolding, domain code generation, schema migration generation and a migration runner"
requires-python = ">=3.10"
keywords = ["scaffolding", "code generation", "migrations", "sql", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "python-dotenv",
    "sqlalchemy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
weft = "weft.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["weft"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
