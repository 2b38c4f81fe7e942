from __future__ import annotations

import json
import logging
from typing import Any

from esper import World

from hexboard.constants import SAVE_VERSION
from hexboard.errors import MalformedDocumentError
from hexboard.events.bus import (
    EVENT_BOARD_LOAD_FAILED,
    EVENT_BOARD_LOAD_REQUEST,
    EVENT_BOARD_LOADED,
    EVENT_BOARD_SAVE_REQUEST,
    EVENT_BOARD_SAVED,
    EventBus,
)
from hexboard.systems import board_serializer

logger = logging.getLogger(__name__)


class BoardPersistenceSystem:
    """Saves the board to a JSON string and restores it on request.

    The most recent save is kept in memory as ``last_snapshot`` so a load
    request without a document restores it.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self._last_snapshot: str | None = None

        self.event_bus.subscribe(EVENT_BOARD_SAVE_REQUEST, self._on_save_request)
        self.event_bus.subscribe(EVENT_BOARD_LOAD_REQUEST, self._on_load_request)

    @property
    def last_snapshot(self) -> str | None:
        return self._last_snapshot

    def save(self, version: int = SAVE_VERSION) -> str:
        payload = board_serializer.save_board(self.world, version)
        document = json.dumps(payload)
        self._last_snapshot = document
        records = len(payload["hexagons"])
        logger.info("Board saved (%s records): %s", records, document)
        self.event_bus.emit(EVENT_BOARD_SAVED, document=document, records=records)
        return document

    def load(self, document: Any = None) -> bool:
        if document is None:
            document = self._last_snapshot
        if document is None:
            logger.info("Nothing to load: no document given and no snapshot saved")
            self.event_bus.emit(EVENT_BOARD_LOAD_FAILED, reason="no document")
            return False
        try:
            parsed = board_serializer.load_board(self.world, document)
        except MalformedDocumentError as exc:
            logger.warning("Rejected save document: %s", exc)
            self.event_bus.emit(EVENT_BOARD_LOAD_FAILED, reason=str(exc))
            return False
        self.event_bus.emit(
            EVENT_BOARD_LOADED,
            applied=parsed.applied,
            skipped=parsed.skipped,
            version=parsed.version,
        )
        return True

    # Event handlers -----------------------------------------------------

    def _on_save_request(self, sender, **payload) -> None:
        version = payload.get("version")
        self.save(SAVE_VERSION if version is None else int(version))

    def _on_load_request(self, sender, **payload) -> None:
        self.load(payload.get("document"))
