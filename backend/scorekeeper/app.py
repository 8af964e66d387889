"""Wiring of storage, history archive and state machine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from scorekeeper.history.archive import HistoryArchive
from scorekeeper.history.models import GameRecord, build_game_record
from scorekeeper.logic.machine import GameStateMachine
from scorekeeper.settings import ScorekeeperSettings
from shared.logging import setup_logging
from shared.storage import KeyValueStorage, LocalKeyValueStorage

if TYPE_CHECKING:
    from datetime import datetime

logger = structlog.get_logger()


@dataclass
class ScoreKeeper:
    """Live game plus history for one UI session.

    The engine never writes history on its own; the UI calls
    ``finish_game`` when a game reaches its result screen.
    """

    machine: GameStateMachine
    archive: HistoryArchive

    def finish_game(self, now: datetime | None = None) -> GameRecord:
        """Save the live game to history, replacing an earlier save of the same game."""
        record = build_game_record(self.machine.state, now=now)
        self.archive.save_game(record)
        return record


def create_scorekeeper(
    settings: ScorekeeperSettings | None = None,
    storage: KeyValueStorage | None = None,
) -> ScoreKeeper:
    if settings is None:
        settings = ScorekeeperSettings()
    if storage is None:
        storage = LocalKeyValueStorage(settings.data_dir)
    archive = HistoryArchive(storage, key=settings.history_key)
    logger.info("score keeper ready", data_dir=settings.data_dir, games=len(archive.records))
    return ScoreKeeper(machine=GameStateMachine(), archive=archive)


def create_scorekeeper_from_env() -> ScoreKeeper:
    """Build a ScoreKeeper from environment settings, with logging configured."""
    settings = ScorekeeperSettings()
    setup_logging(log_dir=settings.log_dir)
    return create_scorekeeper(settings=settings)
