"""Typed domain exceptions for scorekeeping input errors.

Placement patterns that break the game rules are not errors; the advisory
validators report them. These exceptions cover caller contract violations
such as indices outside the fixed round/biome ranges.
"""


class ScoreKeeperError(ValueError):
    """Base exception for scorekeeping contract violations."""


class InvalidPlacementError(ScoreKeeperError):
    """Round/biome index or rank is outside its fixed range."""


class InvalidCategoryError(ScoreKeeperError):
    """Category cannot be scored the requested way (e.g. placement scoring for eggs)."""
