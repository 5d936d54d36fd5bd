"""
Error Taxonomy
==============

Every failure is raised synchronously where it is detected. A failed
calculation never returns a partial design.
"""

from __future__ import annotations


class TransformerDesignError(Exception):
    """Base class for all engine errors."""


class InvalidRequirement(TransformerDesignError):
    """
    Requirement outside the range the engine can design for.

    Attributes:
        field: Name of the offending requirement field
        message: Human readable reason
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class UndersizedConductor(InvalidRequirement):
    """Current density above the conductor's allowed band."""

    def __init__(self, field: str, message: str, current_density: float, limit: float):
        self.current_density = current_density
        self.limit = limit
        super().__init__(field, message)


class InvalidOption(TransformerDesignError):
    """Bad cost-estimation configuration."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class ImpedanceOutOfTolerance(UserWarning):
    """%Z outside the tolerance band around the target. The design is still issued."""
