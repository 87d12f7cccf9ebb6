"""Route group exports."""

from . import health, quote

__all__ = ["quote", "health"]
