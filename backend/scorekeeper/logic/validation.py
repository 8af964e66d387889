"""
Advisory checks for legal placement patterns.

The engine never rejects a placement; the UI uses these to disable illegal
taps and to block leaving a category with an inconsistent grid.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from scorekeeper.logic.points import NUM_BIOMES, NUM_ROUNDS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from scorekeeper.logic.state import Player


def _count_rank(placements: Sequence[Sequence[int]], index: int, rank: int) -> int:
    return sum(1 for row in placements if row[index] == rank)


def validate_round_goals_row(players: Sequence[Player], round_index: int) -> bool:
    """
    Check one round's placements.

    With a sole 1st place, a 3rd needs a 2nd and two or more 2nds leave no
    room for a 3rd. Two tied 1sts use up 2nd place; three or more use up
    2nd and 3rd.
    """
    placements = [p.round_placements for p in players]
    first = _count_rank(placements, round_index, 1)
    second = _count_rank(placements, round_index, 2)
    third = _count_rank(placements, round_index, 3)

    if first + second + third == 0:
        return True
    if first == 0:
        return False
    if first == 1:
        if third > 0 and second == 0:
            return False
        if second >= 2 and third > 0:
            return False
    elif first == 2:
        if second > 0:
            return False
    elif second > 0 or third > 0:
        return False
    return True


def validate_all_round_goals(players: Sequence[Player]) -> bool:
    return all(validate_round_goals_row(players, r) for r in range(NUM_ROUNDS))


def validate_nectar_row(players: Sequence[Player], biome_index: int) -> bool:
    """Check one biome: someone must be 1st, and tied 1sts leave no 2nd place."""
    placements = [p.nectar_placements for p in players]
    first = _count_rank(placements, biome_index, 1)
    second = _count_rank(placements, biome_index, 2)

    if first + second == 0:
        return True
    if first == 0:
        return False
    return not (first >= 2 and second > 0)


def validate_all_nectar(players: Sequence[Player]) -> bool:
    return all(validate_nectar_row(players, b) for b in range(NUM_BIOMES))
