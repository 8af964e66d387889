"""
Point tables for placement-scored categories.

Each table lists the points for slot 0, 1, 2, ... (highest first). Ties
consume consecutive slots, see placement.resolve_placement.
"""

from dataclasses import dataclass

from scorekeeper.logic.enums import Biome, Category

NUM_ROUNDS = 4
NUM_BIOMES = len(Biome)

MAX_ROUND_RANK = 3
MAX_NECTAR_RANK = 2

# rows are rounds 1-4, columns are slots [1st, 2nd, 3rd]
ROUND_GOAL_POINTS: tuple[tuple[int, ...], ...] = (
    (4, 1, 0),
    (5, 2, 1),
    (6, 3, 2),
    (7, 4, 3),
)

# same table for every biome
NECTAR_POINTS: tuple[int, ...] = (5, 2)


@dataclass(frozen=True)
class PlacementScoring:
    """How a placement-driven category turns ranks into points.

    ``placement_field`` names the Player attribute holding one rank per
    round/biome; ``tables`` holds the matching point table for each index.
    """

    category: Category
    placement_field: str
    tables: tuple[tuple[int, ...], ...]
    max_rank: int

    @property
    def size(self) -> int:
        return len(self.tables)


ROUND_GOALS_SCORING = PlacementScoring(
    category=Category.ROUND_GOALS,
    placement_field="round_placements",
    tables=ROUND_GOAL_POINTS,
    max_rank=MAX_ROUND_RANK,
)

NECTAR_SCORING = PlacementScoring(
    category=Category.NECTAR,
    placement_field="nectar_placements",
    tables=(NECTAR_POINTS,) * NUM_BIOMES,
    max_rank=MAX_NECTAR_RANK,
)

PLACEMENT_SCORING: dict[Category, PlacementScoring] = {
    Category.ROUND_GOALS: ROUND_GOALS_SCORING,
    Category.NECTAR: NECTAR_SCORING,
}
