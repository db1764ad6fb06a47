from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Sequence

from app.analysis import AnalysisRecord


class FilterKey(str, Enum):
    IS_PALINDROME = "is_palindrome"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    WORD_COUNT = "word_count"
    CONTAINS_CHARACTER = "contains_character"


class FilterPredicate(NamedTuple):
    key: FilterKey
    value: Any


def is_palindrome(value: bool) -> FilterPredicate:
    return FilterPredicate(FilterKey.IS_PALINDROME, value)


def min_length(n: int) -> FilterPredicate:
    return FilterPredicate(FilterKey.MIN_LENGTH, n)


def max_length(n: int) -> FilterPredicate:
    return FilterPredicate(FilterKey.MAX_LENGTH, n)


def word_count(n: int) -> FilterPredicate:
    return FilterPredicate(FilterKey.WORD_COUNT, n)


def contains_character(c: str) -> FilterPredicate:
    return FilterPredicate(FilterKey.CONTAINS_CHARACTER, c)


_TESTS = {
    FilterKey.IS_PALINDROME: lambda r, v: r.is_palindrome == v,
    FilterKey.MIN_LENGTH: lambda r, v: r.length >= v,
    FilterKey.MAX_LENGTH: lambda r, v: r.length <= v,
    FilterKey.WORD_COUNT: lambda r, v: r.word_count == v,
    FilterKey.CONTAINS_CHARACTER: lambda r, v: v in r.text,
}


def apply_filters(records: Sequence[AnalysisRecord],
                  predicates: Iterable[FilterPredicate]) -> List[AnalysisRecord]:
    """AND every predicate together, narrowing the working set one pass at a time."""
    result = list(records)
    for predicate in predicates:
        test = _TESTS[predicate.key]
        result = [r for r in result if test(r, predicate.value)]
    return result


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _coerce(key: FilterKey, value: Any):
    if key is FilterKey.IS_PALINDROME:
        return value if isinstance(value, bool) else None
    if key is FilterKey.CONTAINS_CHARACTER:
        return value if isinstance(value, str) and len(value) == 1 else None
    return value if _is_count(value) else None


def predicates_from_mapping(mapping: Mapping[str, Any]) -> List[FilterPredicate]:
    """
    Turn a parsed key/value mapping into predicates, keeping its order.
    Unknown keys, None values and values of the wrong type are skipped.
    """
    predicates = []
    for name, value in mapping.items():
        try:
            key = FilterKey(name)
        except ValueError:
            continue
        if value is None:
            continue
        value = _coerce(key, value)
        if value is not None:
            predicates.append(FilterPredicate(key, value))
    return predicates


def predicates_to_mapping(predicates: Iterable[FilterPredicate]) -> Dict[str, Any]:
    return {p.key.value: p.value for p in predicates}
