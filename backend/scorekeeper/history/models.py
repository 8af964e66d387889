"""Persistence models for finished games."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from scorekeeper.logic.aggregate import standings, winners
from scorekeeper.logic.enums import Category  # noqa: TC001

if TYPE_CHECKING:
    from scorekeeper.logic.state import GameState


class RecordedPlayer(BaseModel, frozen=True):
    """Snapshot of one player's result."""

    name: str
    total: int
    scores: dict[Category, int]
    winner: bool
    color: str


class GameRecord(BaseModel):
    """Record of a finished game as stored in the history archive.

    Serialized with camelCase keys (``startPlayerName``) for compatibility
    with existing saved histories.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    date: datetime
    start_player_name: str = Field(default="", alias="startPlayerName")
    players: tuple[RecordedPlayer, ...] = ()

    def to_json_dict(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


def build_game_record(state: GameState, now: datetime | None = None) -> GameRecord:
    """
    Snapshot a finished game.

    Players are listed in standings order and every player sharing the top
    total is flagged as a winner.
    """
    winner_ids = winners(state.players)
    start_player = state.start_player
    return GameRecord(
        id=state.game_id,
        date=now or datetime.now(tz=UTC),
        start_player_name=start_player.name if start_player is not None else "",
        players=tuple(
            RecordedPlayer(
                name=p.name,
                total=p.total,
                scores=dict(p.scores),
                winner=p.id in winner_ids,
                color=p.color,
            )
            for p in standings(state.players)
        ),
    )
