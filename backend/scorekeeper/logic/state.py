"""
Game state models for the score keeper.

All models are frozen; state transitions build new objects with
``model_copy`` instead of mutating.
"""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, Field, computed_field, field_validator

from scorekeeper.logic.enums import CATEGORIES, Category, Phase
from scorekeeper.logic.points import NUM_BIOMES, NUM_ROUNDS


def new_id() -> str:
    return str(uuid4())


def empty_scores() -> dict[Category, int]:
    return dict.fromkeys(CATEGORIES, 0)


class Player(BaseModel, frozen=True):
    """
    A player at the table with placements and per-category scores.

    ``total`` is derived from ``scores`` and cannot be set on its own.
    """

    id: str = Field(default_factory=new_id)
    name: str
    color: str
    round_placements: tuple[int, ...] = (0,) * NUM_ROUNDS  # 0 = unplaced, 1-3 = rank
    nectar_placements: tuple[int, ...] = (0,) * NUM_BIOMES  # forest, grassland, wetland
    scores: dict[Category, int] = Field(default_factory=empty_scores)

    @field_validator("scores")
    @classmethod
    def _fill_missing_categories(cls, v: dict[Category, int]) -> dict[Category, int]:
        return {category: v.get(category, 0) for category in CATEGORIES}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return sum(self.scores.values())


class GameState(BaseModel, frozen=True):
    """
    Full state of one scoring session.

    ``players`` is in insertion order, which is also turn and display order.
    ``category_index`` is the scoring cursor into CATEGORIES.
    """

    game_id: str = Field(default_factory=new_id)
    players: tuple[Player, ...] = ()
    phase: Phase = Phase.SETUP
    category_index: int = 0
    start_player_id: str | None = None

    @property
    def current_category(self) -> Category:
        return CATEGORIES[self.category_index]

    @property
    def start_player(self) -> Player | None:
        return find_player(self.players, self.start_player_id)


def find_player(players: tuple[Player, ...], player_id: str | None) -> Player | None:
    """Look up a player by id, None when absent."""
    return next((p for p in players if p.id == player_id), None)
