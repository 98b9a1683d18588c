from __future__ import annotations

"""Exceptions raised by the technology progression package."""


class TechProgressionError(ValueError):
    """Raised when progression data fails strict validation or coercion."""


__all__ = ["TechProgressionError"]
