"""Terminal dashboard and JSON API for git, CI/CD, task and code quality status."""

__version__ = "0.1.0"