"""
Tie resolution for round-goal and nectar placements.

Ranks are processed in ascending order. Each rank group consumes as many
point-table slots as it has members and splits their sum evenly with floor
division; the remainder is discarded. Saved games depend on the floor
semantics, so rounding must not change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


def split_slots(points: Sequence[int], start: int, count: int) -> int:
    """
    Return the even share of ``count`` consecutive slots starting at ``start``.

    Slots past the end of the table are worth 0.
    """
    total = sum(points[slot] for slot in range(start, start + count) if slot < len(points))
    return total // count


def resolve_placement(
    ranks: Mapping[str, int],
    points: Sequence[int],
    max_rank: int,
) -> dict[str, int]:
    """
    Award points for one round or biome.

    Args:
        ranks: Player id -> rank (0 = unplaced, 1 = 1st, ...)
        points: Point table, one value per slot, highest first
        max_rank: Highest rank that scores in this competition

    Returns:
        Player id -> awarded points, for every id in ``ranks``

    """
    awards = dict.fromkeys(ranks, 0)
    slot = 0
    for rank in range(1, max_rank + 1):
        group = [player_id for player_id, player_rank in ranks.items() if player_rank == rank]
        if not group:
            continue
        share = split_slots(points, slot, len(group))
        for player_id in group:
            awards[player_id] = share
        slot += len(group)
    return awards
