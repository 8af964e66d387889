"""
String enum definitions for Wingspan scoring concepts.
"""

from enum import Enum


class Phase(str, Enum):
    """Stage of a single game session's scoring workflow."""

    SETUP = "SETUP"
    SELECTION = "SELECTION"
    SCORING = "SCORING"
    RESULT = "RESULT"
    STATS = "STATS"


class Category(str, Enum):
    """Scoring categories, declared in the order the scoring cursor visits them."""

    BIRDS = "birds"
    BONUS = "bonus"
    ROUND_GOALS = "round_goals"
    EGGS = "eggs"
    FOOD = "food"  # food on cards
    TUCKED = "tucked"
    NECTAR = "nectar"


CATEGORIES: tuple[Category, ...] = tuple(Category)


class Biome(str, Enum):
    """Habitats competing for nectar majority, in biome index order."""

    FOREST = "forest"
    GRASSLAND = "grassland"
    WETLAND = "wetland"
