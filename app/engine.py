from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
import logging

from app.analysis import AnalysisRecord, analyze, content_hash
from app.errors import EmptyInput, NotFound
from app.filters import FilterPredicate, apply_filters, predicates_from_mapping, predicates_to_mapping
from app.nl_query import translate
from app.store import StringStore

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class QueryEngine:
    """Submit, fetch, delete and filter analyzed strings held in a StringStore."""

    def __init__(self, store: Optional[StringStore] = None,
                 clock: Callable[[], datetime] = utc_now):
        self.store = store if store is not None else StringStore()
        self.clock = clock

    @staticmethod
    def _check(text: str) -> None:
        if len(text) == 0:
            raise EmptyInput()

    def submit(self, text: str) -> AnalysisRecord:
        self._check(text)
        logger.info("Received input: %r", text)
        record = self.store.insert_if_absent(analyze(text, self.clock()))
        logger.info("Stored %s (%d records)", record.content_hash, len(self.store))
        return record

    def get(self, text: str) -> AnalysisRecord:
        self._check(text)
        record = self.store.lookup_by_text(text)
        if record is None:
            raise NotFound(content_hash(text))
        return record

    def remove(self, text: str) -> None:
        self._check(text)
        self.store.delete_by_text(text)
        logger.info("Deleted input: %r", text)

    def list(self, predicates: Iterable[FilterPredicate] = ()) -> List[AnalysisRecord]:
        return apply_filters(self.store.all_records(), predicates)

    def list_by_query(self, query: str) -> Tuple[List[AnalysisRecord], Dict[str, Any]]:
        parsed = translate(query)
        predicates = predicates_from_mapping(parsed)
        logger.debug("Query %r resolved to %s", query, parsed)
        return self.list(predicates), predicates_to_mapping(predicates)
