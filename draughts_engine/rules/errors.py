"""
Configuration Errors

Configuration problems are the only failures the rules engine raises: they
surface synchronously when a variant is loaded, registered or imported.
Illegal moves are never exceptions (the generator and validator return
empty lists / False instead).
"""

from typing import List, Optional


class ConfigError(Exception):
    """Base class for variant configuration failures."""


class UnknownVariantError(ConfigError, KeyError):
    """Raised when a variant is neither built in nor registered."""

    def __init__(self, variant: str):
        self.variant = variant
        super().__init__(variant)

    def __str__(self) -> str:
        return f"Unknown variant: {self.variant}"


class InvalidConfigError(ConfigError, ValueError):
    """
    Raised when a configuration fails validation.

    Attributes:
        errors: Field-path messages, e.g. "board.size: Input should be less
            than or equal to 12"
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors: List[str] = list(errors or [])
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if not self.errors:
            return message
        return f"{message}: " + "; ".join(self.errors)
