"""Persisted collection storage with atomic replacement."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationError

from ..models import Collection, Record

# Field that wraps the record list in the current on-disk layout
ITEMS_FIELD = "items"


class PriorSnapshot(BaseModel):
    """Previously published collection, as read back from disk."""

    raw_text: str = Field(..., description="File content, for verbatim re-publishing")
    items: List[Record] = Field(default_factory=list, description="Parsed records")
    legacy_layout: bool = Field(False, description="Stored as a bare list of records")

    @property
    def is_empty(self) -> bool:
        return not self.items


def parse_snapshot(text: str) -> Optional[PriorSnapshot]:
    """
    Parse a persisted collection.

    Accepts both a bare JSON list of records and an object wrapping the list
    under ``items``. Anything else is treated as no snapshot.
    """
    try:
        payload: Any = json.loads(text)
    except ValueError:
        return None

    legacy = isinstance(payload, list)
    if legacy:
        entries = payload
    elif isinstance(payload, dict) and isinstance(payload.get(ITEMS_FIELD), list):
        entries = payload[ITEMS_FIELD]
    else:
        return None

    try:
        items = [Record.model_validate(entry) for entry in entries]
    except ValidationError:
        return None
    return PriorSnapshot(raw_text=text, items=items, legacy_layout=legacy)


def atomic_write_text(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` via a temp file in the same directory and a rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class SnapshotStore:
    """Read and write the published collection file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read(self) -> Optional[PriorSnapshot]:
        """Read the prior collection; unreadable or malformed files count as absent."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None
        return parse_snapshot(text)

    def write(self, collection: Collection) -> None:
        atomic_write_text(self.path, collection.to_json())

    def write_verbatim(self, snapshot: PriorSnapshot) -> None:
        atomic_write_text(self.path, snapshot.raw_text)
