"""Unit tests for score aggregation, standings and winners."""

import pytest

from scorekeeper.logic.aggregate import (
    apply_manual_score,
    apply_placement,
    placement_points,
    standings,
    winners,
)
from scorekeeper.logic.enums import Category
from scorekeeper.logic.exceptions import InvalidCategoryError
from scorekeeper.tests.helpers import create_player


def _scores(players, category):
    return {p.id: p.scores[category] for p in players}


class TestApplyPlacement:
    def test_tied_first_in_round_one(self):
        """A and B tie for 1st, C is 2nd: A=2, B=2, C=0."""
        players = (
            create_player("a", round_placements=(1, 0, 0, 0)),
            create_player("b", round_placements=(1, 0, 0, 0)),
            create_player("c", round_placements=(2, 0, 0, 0)),
        )
        result = apply_placement(players, Category.ROUND_GOALS)
        assert _scores(result, Category.ROUND_GOALS) == {"a": 2, "b": 2, "c": 0}

    def test_sums_across_all_rounds(self):
        players = (
            create_player("a", round_placements=(1, 2, 1, 1)),
            create_player("b", round_placements=(2, 1, 2, 2)),
        )
        result = apply_placement(players, Category.ROUND_GOALS)
        assert _scores(result, Category.ROUND_GOALS) == {"a": 4 + 2 + 6 + 7, "b": 1 + 5 + 3 + 4}

    def test_nectar_sums_across_biomes(self):
        players = (
            create_player("a", nectar_placements=(1, 1, 2)),
            create_player("b", nectar_placements=(2, 1, 1)),
        )
        result = apply_placement(players, Category.NECTAR)
        # forest 5/2, grassland tie (5+2)//2, wetland 2/5
        assert _scores(result, Category.NECTAR) == {"a": 5 + 3 + 2, "b": 2 + 3 + 5}

    def test_idempotent(self):
        players = (
            create_player("a", round_placements=(1, 1, 0, 2)),
            create_player("b", round_placements=(1, 2, 1, 1)),
        )
        once = apply_placement(players, Category.ROUND_GOALS)
        twice = apply_placement(once, Category.ROUND_GOALS)
        assert once == twice

    def test_total_follows_placement_score(self):
        players = (create_player("a", round_placements=(1, 0, 0, 0), scores={Category.BIRDS: 30}),)
        result = apply_placement(players, Category.ROUND_GOALS)
        assert result[0].total == 34
        assert result[0].total == sum(result[0].scores.values())

    def test_does_not_mutate_input(self):
        player = create_player("a", round_placements=(1, 0, 0, 0))
        apply_placement((player,), Category.ROUND_GOALS)
        assert player.scores[Category.ROUND_GOALS] == 0
        assert player.total == 0

    def test_other_categories_untouched(self):
        players = (create_player("a", nectar_placements=(1, 0, 0), scores={Category.EGGS: 7}),)
        result = apply_placement(players, Category.NECTAR)
        assert result[0].scores[Category.EGGS] == 7
        assert result[0].scores[Category.ROUND_GOALS] == 0

    def test_manual_category_rejected(self):
        with pytest.raises(InvalidCategoryError, match="eggs"):
            placement_points((create_player("a"),), Category.EGGS)

    def test_empty_player_collection(self):
        assert apply_placement((), Category.ROUND_GOALS) == ()


class TestApplyManualScore:
    def test_overwrites_one_player(self):
        players = (create_player("a"), create_player("b", scores={Category.BIRDS: 12}))
        result = apply_manual_score(players, "a", Category.BIRDS, 40)
        assert result[0].scores[Category.BIRDS] == 40
        assert result[0].total == 40
        assert result[1] is players[1]

    def test_negative_values_kept(self):
        result = apply_manual_score((create_player("a", scores={Category.EGGS: 5}),), "a", Category.BONUS, -3)
        assert result[0].scores[Category.BONUS] == -3
        assert result[0].total == 2

    def test_unknown_player_is_noop(self):
        players = (create_player("a"),)
        assert apply_manual_score(players, "missing", Category.BIRDS, 9) == players


class TestStandings:
    def test_sorted_by_total_descending(self):
        players = [
            create_player("a", scores={Category.BIRDS: 10}),
            create_player("b", scores={Category.BIRDS: 30}),
            create_player("c", scores={Category.BIRDS: 20}),
        ]
        assert [p.id for p in standings(players)] == ["b", "c", "a"]

    def test_ties_keep_turn_order(self):
        players = [
            create_player("a", scores={Category.EGGS: 5}),
            create_player("b", scores={Category.EGGS: 5}),
        ]
        assert [p.id for p in standings(players)] == ["a", "b"]


class TestWinners:
    def test_shared_top_total(self):
        players = [
            create_player("a", scores={Category.BIRDS: 50}),
            create_player("b", scores={Category.BIRDS: 50}),
            create_player("c", scores={Category.BIRDS: 49}),
        ]
        assert winners(players) == {"a", "b"}

    def test_no_players(self):
        assert winners([]) == set()
