# app/services/index_store.py
from __future__ import annotations

import asyncio
import json
import logging
import os
import time
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError


class UploadRecord(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="allow")

    numero: str = Field(min_length=1)
    data: Optional[str] = None
    filename: str
    arquivo_url: str
    timestamp: int


class IndexDocument(BaseModel):
    items: List[UploadRecord] = Field(default_factory=list)

    # raw entries that failed validation; written back untouched on save
    _skipped: List[Any] = PrivateAttr(default_factory=list)


def now_ms() -> int:
    return int(time.time() * 1000)


class IndexStore:
    """
    JSON file holding every upload record, read and rewritten whole.

    Appends go through a lock owned by the store so concurrent requests in
    the same process cannot overwrite each other's records.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def ensure(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.save(IndexDocument())

    def load(self) -> IndexDocument:
        # A damaged index must not take the service down; lookups fall back to the directory scan.
        try:
            raw = json.loads(self.path.read_bytes())
        except FileNotFoundError:
            logging.warning(f"Index file {self.path} not found; starting empty.")
            return IndexDocument()
        except (OSError, ValueError) as e:
            logging.warning(f"Index file {self.path} unreadable ({e}); starting empty.")
            return IndexDocument()
        if not isinstance(raw, dict) or not isinstance(raw.get("items", []), list):
            logging.warning(f"Index file {self.path} has no items list; starting empty.")
            return IndexDocument()

        doc = IndexDocument()
        for pos, entry in enumerate(raw.get("items", [])):
            try:
                doc.items.append(UploadRecord.model_validate(entry))
            except ValidationError as e:
                logging.warning(f"Skipping invalid index entry #{pos} in {self.path}: {e.errors()}")
                doc._skipped.append(entry)
        return doc

    def save(self, document: IndexDocument) -> None:
        payload = document.model_dump(mode="json")
        payload["items"] = list(document._skipped) + payload["items"]
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self.path)

    async def append(self, record: UploadRecord) -> UploadRecord:
        async with self._lock:
            doc = self.load()
            if doc.items and record.timestamp < doc.items[-1].timestamp:
                record = record.model_copy(update={"timestamp": doc.items[-1].timestamp})
            doc.items.append(record)
            self.save(doc)
        return record
