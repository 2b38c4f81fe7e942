"""Versioned save/restore of the board.

A save document looks like::

    {"version": 1, "hexagons": [{"q": 0, "r": -1, "s": 1, "blocked": true, "rotation": 120}, ...]}

Only tiles that differ from the default state are written, and each record
carries only its non-default fields. Loading is all-or-nothing at the parse
stage and best effort per record: records for coordinates outside the board,
unknown keys and invalid field values are skipped.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Union

from esper import World

from hexboard.components.tile import TileRecord
from hexboard.constants import SAVE_VERSION
from hexboard.errors import MalformedDocumentError, VersionMismatchError
from hexboard.systems import board_ops

logger = logging.getLogger(__name__)

DocumentSource = Union[str, bytes, Mapping[str, Any]]


@dataclass(slots=True)
class SaveDocument:
    version: int
    records: List[TileRecord] = field(default_factory=list)
    applied: int = 0
    skipped: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "hexagons": [record.to_dict() for record in self.records],
        }


def save_board(world: World, version: int = SAVE_VERSION) -> Dict[str, Any]:
    records = []
    for tile in board_ops.all_tiles(world):
        record = tile.to_record(version)
        if record is not None:
            records.append(record)
    return SaveDocument(version=version, records=records).to_dict()


def dump_board(world: World, version: int = SAVE_VERSION) -> str:
    return json.dumps(save_board(world, version))


def check_version(version: int, *, strict: bool = False) -> bool:
    """Return True when ``version`` is one this build fully understands."""
    if version <= SAVE_VERSION:
        return True
    if strict:
        raise VersionMismatchError(version, SAVE_VERSION)
    logger.warning(
        "Save document version %s is newer than supported version %s; unknown fields will be ignored",
        version,
        SAVE_VERSION,
    )
    return False


def parse_document(source: DocumentSource) -> SaveDocument:
    if isinstance(source, (str, bytes, bytearray)):
        try:
            payload = json.loads(source)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedDocumentError(f"Save document is not valid JSON: {exc}") from exc
        except RecursionError as exc:
            raise MalformedDocumentError("Save document is nested too deeply to parse") from exc
    else:
        payload = source
    if not isinstance(payload, Mapping):
        raise MalformedDocumentError("Save document must be a JSON object")
    if "version" not in payload:
        raise MalformedDocumentError("Save document has no 'version'")
    version = payload["version"]
    if not isinstance(version, int) or isinstance(version, bool):
        raise MalformedDocumentError(f"Save document version must be an integer, got {version!r}")
    if "hexagons" not in payload:
        raise MalformedDocumentError("Save document has no 'hexagons'")
    entries = payload["hexagons"]
    if not isinstance(entries, list):
        raise MalformedDocumentError("Save document 'hexagons' must be a list")

    check_version(version)
    document = SaveDocument(version=version)
    for entry in entries:
        record = TileRecord.from_dict(entry, version)
        if record is None:
            document.skipped += 1
            continue
        document.records.append(record)
    return document


def load_board(world: World, source: Union[DocumentSource, SaveDocument]) -> SaveDocument:
    """Replace the board with the state described by ``source``.

    Raises MalformedDocumentError before touching the board if the document
    cannot be parsed. Returns the parsed document with ``skipped`` counting
    records that were not applied. A SaveDocument passed in is not modified.
    """
    if isinstance(source, SaveDocument):
        document = replace(source, records=list(source.records), applied=0)
    else:
        document = parse_document(source)
    board_ops.reset_board(world)
    for record in document.records:
        if not board_ops.has_tile(world, record.coordinate):
            logger.debug("Skipping record for %s outside the board", record.coordinate)
            document.skipped += 1
            continue
        board_ops.find_tile(world, record.coordinate).apply_record(record, document.version)
        document.applied += 1
    logger.info(
        "Loaded save document version %s: %s records applied, %s skipped",
        document.version,
        document.applied,
        document.skipped,
    )
    return document


def reset_board(world: World) -> None:
    board_ops.reset_board(world)
