"""Builders for test players and states."""

from __future__ import annotations

from typing import TYPE_CHECKING

from scorekeeper.logic.state import GameState, Player

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from scorekeeper.logic.enums import Category, Phase


def create_player(
    player_id: str = "p0",
    name: str | None = None,
    *,
    color: str = "blue",
    round_placements: Sequence[int] | None = None,
    nectar_placements: Sequence[int] | None = None,
    scores: Mapping[Category, int] | None = None,
) -> Player:
    """Create a Player with a readable fixed id."""
    kwargs: dict[str, object] = {
        "id": player_id,
        "name": name if name is not None else player_id.upper(),
        "color": color,
    }
    if round_placements is not None:
        kwargs["round_placements"] = tuple(round_placements)
    if nectar_placements is not None:
        kwargs["nectar_placements"] = tuple(nectar_placements)
    if scores is not None:
        kwargs["scores"] = dict(scores)
    return Player(**kwargs)


def create_game_state(
    players: Sequence[Player] = (),
    *,
    game_id: str = "game-1",
    phase: Phase | None = None,
    category_index: int = 0,
    start_player_id: str | None = None,
) -> GameState:
    kwargs: dict[str, object] = {
        "game_id": game_id,
        "players": tuple(players),
        "category_index": category_index,
        "start_player_id": start_player_id,
    }
    if phase is not None:
        kwargs["phase"] = phase
    return GameState(**kwargs)
