from collections import OrderedDict
from typing import List, Optional
import threading

from app.analysis import AnalysisRecord, content_hash
from app.errors import AlreadyExists, NotFound


class StringStore:
    """
    In-memory records keyed by content hash, kept in insertion order.
    One lock guards the whole collection; only dict operations run while
    it is held, hashing and analysis happen before acquiring it.
    """

    def __init__(self):
        self._records: "OrderedDict[str, AnalysisRecord]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def lookup_by_text(self, text: str) -> Optional[AnalysisRecord]:
        key = content_hash(text)
        with self._lock:
            return self._records.get(key)

    def insert_if_absent(self, record: AnalysisRecord) -> AnalysisRecord:
        with self._lock:
            existing = self._records.get(record.content_hash)
            if existing is None:
                self._records[record.content_hash] = record
        if existing is not None:
            raise AlreadyExists(existing)
        return record

    def delete_by_text(self, text: str) -> None:
        key = content_hash(text)
        with self._lock:
            removed = self._records.pop(key, None)
        if removed is None:
            raise NotFound(key)

    def all_records(self) -> List[AnalysisRecord]:
        with self._lock:
            return list(self._records.values())
