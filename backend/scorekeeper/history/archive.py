"""History of finished games, persisted through key-value storage.

The archive loads once at construction and writes the whole list back after
every mutation. Storage failures are logged and never raised; the in-memory
list stays authoritative for the session.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import structlog
from pydantic import TypeAdapter, ValidationError

from scorekeeper.history.models import GameRecord

if TYPE_CHECKING:
    from collections.abc import Callable

    from shared.storage import KeyValueStorage

    HistoryListener = Callable[[tuple[GameRecord, ...]], None]

logger = structlog.get_logger()

HISTORY_KEY = "wingspan_game_history"

_records_adapter = TypeAdapter(list[GameRecord])


class HistoryArchive:
    """Most-recent-first list of GameRecords keyed by game id."""

    def __init__(self, storage: KeyValueStorage, key: str = HISTORY_KEY) -> None:
        self._storage = storage
        self._key = key
        self._records: tuple[GameRecord, ...] = self._load()
        self._listeners: list[HistoryListener] = []

    def _load(self) -> tuple[GameRecord, ...]:
        """Read the stored history, falling back to empty on any failure."""
        try:
            raw = self._storage.get(self._key)
        except (OSError, ValueError):
            logger.exception("failed to read game history", key=self._key)
            return ()
        if not raw:
            return ()
        try:
            records = _records_adapter.validate_json(raw)
        except ValidationError:
            logger.exception("failed to load game history", key=self._key)
            return ()
        logger.info("loaded game history", key=self._key, count=len(records))
        return tuple(records)

    def _persist(self) -> None:
        content = json.dumps([record.to_json_dict() for record in self._records])
        try:
            self._storage.set(self._key, content)
        except Exception:
            logger.exception("failed to save game history", key=self._key)

    def _publish(self, records: tuple[GameRecord, ...]) -> tuple[GameRecord, ...]:
        self._records = records
        for listener in list(self._listeners):
            try:
                listener(records)
            except Exception:
                logger.exception("history listener failed")
        return records

    @property
    def records(self) -> tuple[GameRecord, ...]:
        return self._records

    def get_game(self, game_id: str) -> GameRecord | None:
        return next((r for r in self._records if r.id == game_id), None)

    def subscribe(self, listener: HistoryListener) -> Callable[[], None]:
        """Register a listener, call it with the current records and return an unsubscribe callable."""
        self._listeners.append(listener)
        listener(self._records)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def save_game(self, record: GameRecord) -> tuple[GameRecord, ...]:
        """
        Insert or update a record.

        A record whose id is already archived replaces it in place (a
        finished game whose scores were adjusted); a new id goes to the front.
        """
        records = list(self._records)
        index = next((i for i, r in enumerate(records) if r.id == record.id), None)
        if index is not None:
            records[index] = record
            logger.info("game record updated", game_id=record.id)
        else:
            records.insert(0, record)
            logger.info("game record saved", game_id=record.id)
        self._publish(tuple(records))
        self._persist()
        return self._records

    def delete_game(self, game_id: str) -> tuple[GameRecord, ...]:
        if self.get_game(game_id) is None:
            return self._records
        self._publish(tuple(r for r in self._records if r.id != game_id))
        logger.info("game record deleted", game_id=game_id)
        self._persist()
        return self._records

    def clear_history(self) -> tuple[GameRecord, ...]:
        self._publish(())
        try:
            self._storage.remove(self._key)
        except Exception:
            logger.exception("failed to clear game history", key=self._key)
        logger.info("game history cleared")
        return self._records
