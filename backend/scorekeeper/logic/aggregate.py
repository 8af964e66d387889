"""
Score aggregation over the player collection.

Every function here is pure: it returns a new tuple of players and never
mutates its input. Totals follow automatically because Player.total is
derived from scores.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from scorekeeper.logic.exceptions import InvalidCategoryError
from scorekeeper.logic.placement import resolve_placement
from scorekeeper.logic.points import PLACEMENT_SCORING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from scorekeeper.logic.enums import Category
    from scorekeeper.logic.state import Player


def placement_points(players: Iterable[Player], category: Category) -> dict[str, int]:
    """
    Sum the tie-resolved awards of every round/biome of ``category`` per player.

    Raises:
        InvalidCategoryError: If ``category`` is not scored by placements

    """
    scoring = PLACEMENT_SCORING.get(category)
    if scoring is None:
        raise InvalidCategoryError(f"{category.value} is not a placement category")

    players = tuple(players)
    points = {p.id: 0 for p in players}
    for index, table in enumerate(scoring.tables):
        ranks = {p.id: getattr(p, scoring.placement_field)[index] for p in players}
        for player_id, award in resolve_placement(ranks, table, scoring.max_rank).items():
            points[player_id] += award
    return points


def set_score(player: Player, category: Category, value: int) -> Player:
    """Return a copy of ``player`` with one category score replaced."""
    return player.model_copy(update={"scores": {**player.scores, category: value}})


def apply_placement(players: Iterable[Player], category: Category) -> tuple[Player, ...]:
    """
    Re-derive ``category`` for every player from the current placements.

    All rounds/biomes of the category are recomputed, so calling this twice
    with the same placements gives the same scores.
    """
    players = tuple(players)
    points = placement_points(players, category)
    return tuple(set_score(p, category, points[p.id]) for p in players)


def apply_manual_score(
    players: Iterable[Player],
    player_id: str,
    category: Category,
    value: int,
) -> tuple[Player, ...]:
    """Overwrite one player's score for ``category``; negative values are kept as-is."""
    return tuple(set_score(p, category, value) if p.id == player_id else p for p in players)


def standings(players: Iterable[Player]) -> list[Player]:
    """Players by total descending; equal totals keep turn order."""
    return sorted(players, key=lambda p: p.total, reverse=True)


def winners(players: Iterable[Player]) -> set[str]:
    """Ids of every player sharing the highest total."""
    players = tuple(players)
    if not players:
        return set()
    best = max(p.total for p in players)
    return {p.id for p in players if p.total == best}
