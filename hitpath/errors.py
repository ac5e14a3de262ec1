"""Exception classes raised by hitpath."""
from __future__ import annotations


class HitPathError(Exception):
    """Base exception for all hitpath errors."""


class ConfigError(HitPathError, ValueError):
    """Raised when physical constants or config files are not usable."""
