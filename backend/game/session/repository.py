"""Persist the latest game snapshot as a JSON document in a key-value store.

The document layout is the camelCase one written by earlier versions of the
scorekeeper, so old saves keep loading:
- documents without ``scoringVariation`` are full-gun games;
- history records may name the round counter ``round`` instead of ``game``;
- score changes written before seats were recorded carry only a name, and
  get the seat of the first player with that name.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from game.logic.enums import ScoringVariation
from game.logic.exceptions import CorruptStateError
from game.logic.state import GameState

if TYPE_CHECKING:
    from shared.storage import KeyValueStore

logger = structlog.get_logger()

SESSION_KEY = "mahjong_game"


def _upgrade_legacy_document(document: dict[str, Any]) -> dict[str, Any]:
    """Fill in fields that older documents did not store."""
    document.setdefault("scoringVariation", ScoringVariation.FULL.value)

    names = [p.get("name") for p in document.get("players", []) if isinstance(p, dict)]
    for record in document.get("history", []):
        if not isinstance(record, dict):
            continue
        for change in record.get("changes", []):
            if isinstance(change, dict) and "seat" not in change and change.get("name") in names:
                change["seat"] = names.index(change["name"])
    return document


class GameStateRepository:
    """Load, save, and clear the session's game state."""

    def __init__(self, store: KeyValueStore, key: str = SESSION_KEY) -> None:
        self._store = store
        self._key = key

    def load(self) -> GameState | None:
        """Return the stored game, or None when no game has been started.

        Raises CorruptStateError when the stored document cannot be read back.
        """
        raw = self._store.get(self._key)
        if raw is None:
            return None

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("stored game is not valid JSON", key=self._key)
            raise CorruptStateError(f"stored game under '{self._key}' is not valid JSON") from e
        if not isinstance(document, dict):
            raise CorruptStateError(f"stored game under '{self._key}' is not a JSON object")

        try:
            return GameState.model_validate(_upgrade_legacy_document(document))
        except ValidationError as e:
            logger.warning("stored game failed validation", key=self._key, error_count=e.error_count())
            raise CorruptStateError(f"stored game under '{self._key}' is invalid: {e}") from e

    def save(self, state: GameState) -> None:
        self._store.set(self._key, state.model_dump_json(by_alias=True))

    def clear(self) -> None:
        """Forget the stored game."""
        self._store.delete(self._key)
