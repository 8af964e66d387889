"""
Game state machine for a single scoring session.

Phases run SETUP -> SELECTION -> SCORING -> RESULT <-> STATS, with
RESULT/STATS -> SCORING for score adjustment and SCORING -> SETUP when
stepping back past the first category.

The machine is the only writer of its GameState. Every operation builds a
complete new state, swaps it in, publishes it to subscribers and returns it.
An operation either publishes a consistent new state or leaves the old one
in place.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

import structlog

from scorekeeper.logic.aggregate import apply_manual_score, apply_placement
from scorekeeper.logic.enums import CATEGORIES, Phase
from scorekeeper.logic.exceptions import InvalidPlacementError
from scorekeeper.logic.points import NECTAR_SCORING, ROUND_GOALS_SCORING, PlacementScoring
from scorekeeper.logic.state import GameState, Player, find_player

if TYPE_CHECKING:
    from collections.abc import Callable

    from scorekeeper.logic.enums import Category

    StateListener = Callable[[GameState], None]

logger = structlog.get_logger()


def _check_placement(scoring: PlacementScoring, index: int, rank: int) -> None:
    if not 0 <= index < scoring.size:
        raise InvalidPlacementError(
            f"{scoring.category.value} index {index} out of range 0..{scoring.size - 1}",
        )
    if not 0 <= rank <= scoring.max_rank:
        raise InvalidPlacementError(
            f"{scoring.category.value} rank {rank} out of range 0..{scoring.max_rank}",
        )


def _replace_at(values: tuple[int, ...], index: int, value: int) -> tuple[int, ...]:
    return (*values[:index], value, *values[index + 1 :])


class GameStateMachine:
    """Owns the live GameState and exposes its transitions."""

    def __init__(self, state: GameState | None = None) -> None:
        self._state = state if state is not None else GameState()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> GameState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a listener for published states.

        The listener is called immediately with the current state. Returns a
        callable that unregisters it.
        """
        self._listeners.append(listener)
        listener(self._state)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, state: GameState) -> GameState:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("state listener failed", game_id=state.game_id)
        return state

    # --- Players ---

    def add_player(self, name: str, color: str) -> GameState:
        player = Player(name=name, color=color)
        logger.info("player added", game_id=self._state.game_id, player_id=player.id)
        return self._commit(self._state.model_copy(update={"players": (*self._state.players, player)}))

    def remove_player(self, player_id: str) -> GameState:
        """Drop a player and rescore placements, since awards depend on who else placed."""
        state = self._state
        if find_player(state.players, player_id) is None:
            return state
        players = tuple(p for p in state.players if p.id != player_id)
        for scoring in (ROUND_GOALS_SCORING, NECTAR_SCORING):
            players = apply_placement(players, scoring.category)
        updates: dict[str, object] = {"players": players}
        if state.start_player_id == player_id:
            updates["start_player_id"] = None
        logger.info("player removed", game_id=state.game_id, player_id=player_id)
        return self._commit(state.model_copy(update=updates))

    def set_start_player(self, player_id: str) -> GameState:
        if find_player(self._state.players, player_id) is None:
            return self._state
        return self._commit(self._state.model_copy(update={"start_player_id": player_id}))

    def pick_random_start_player(self, rng: random.Random | None = None) -> GameState:
        """Choose the start player uniformly at random; no-op without players."""
        if not self._state.players:
            return self._state
        rng = rng or random.Random()  # noqa: S311
        player = rng.choice(self._state.players)
        logger.info("start player drawn", game_id=self._state.game_id, player_id=player.id)
        return self.set_start_player(player.id)

    def set_phase(self, phase: Phase) -> GameState:
        phase = Phase(phase)
        logger.info("phase changed", game_id=self._state.game_id, phase=phase)
        return self._commit(self._state.model_copy(update={"phase": phase}))

    # --- Scoring ---

    def update_score(self, player_id: str, category: Category, value: int) -> GameState:
        state = self._state
        if find_player(state.players, player_id) is None:
            return state
        players = apply_manual_score(state.players, player_id, category, value)
        return self._commit(state.model_copy(update={"players": players}))

    def update_round_placement(self, player_id: str, round_index: int, rank: int) -> GameState:
        return self._update_placement(ROUND_GOALS_SCORING, player_id, round_index, rank)

    def update_nectar_placement(self, player_id: str, biome_index: int, rank: int) -> GameState:
        return self._update_placement(NECTAR_SCORING, player_id, biome_index, rank)

    def reset_all_round_placements(self) -> GameState:
        return self._reset_placements(ROUND_GOALS_SCORING)

    def reset_all_nectar_placements(self) -> GameState:
        return self._reset_placements(NECTAR_SCORING)

    def _update_placement(self, scoring: PlacementScoring, player_id: str, index: int, rank: int) -> GameState:
        _check_placement(scoring, index, rank)
        state = self._state
        if find_player(state.players, player_id) is None:
            return state

        field = scoring.placement_field
        players = tuple(
            p.model_copy(update={field: _replace_at(getattr(p, field), index, rank)}) if p.id == player_id else p
            for p in state.players
        )
        # placements are relative, so every player's award may change
        players = apply_placement(players, scoring.category)
        logger.debug(
            "placement updated",
            game_id=state.game_id,
            player_id=player_id,
            category=scoring.category,
            index=index,
            rank=rank,
        )
        return self._commit(state.model_copy(update={"players": players}))

    def _reset_placements(self, scoring: PlacementScoring) -> GameState:
        state = self._state
        cleared = (0,) * scoring.size
        players = tuple(p.model_copy(update={scoring.placement_field: cleared}) for p in state.players)
        players = apply_placement(players, scoring.category)
        return self._commit(state.model_copy(update={"players": players}))

    # --- Category cursor ---

    def next_category(self) -> GameState:
        state = self._state
        next_index = state.category_index + 1
        if next_index >= len(CATEGORIES):
            return self._commit(state.model_copy(update={"phase": Phase.RESULT}))
        return self._commit(state.model_copy(update={"category_index": next_index}))

    def prev_category(self) -> GameState:
        state = self._state
        prev_index = state.category_index - 1
        if prev_index < 0:
            return self._commit(state.model_copy(update={"phase": Phase.SETUP, "category_index": 0}))
        return self._commit(state.model_copy(update={"category_index": prev_index}))

    def back_to_scoring(self) -> GameState:
        """Reopen scoring on the last category to adjust a finished game."""
        return self._commit(
            self._state.model_copy(update={"phase": Phase.SCORING, "category_index": len(CATEGORIES) - 1}),
        )

    def reset_game(self) -> GameState:
        state = GameState()
        logger.info("game reset", game_id=state.game_id)
        return self._commit(state)
