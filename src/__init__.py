"""Git pre-commit hook runner."""

__version__ = "0.1.0"
