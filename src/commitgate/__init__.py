"""commitgate — conventional-commit subject linting for CI."""

__version__ = "0.1.0"
