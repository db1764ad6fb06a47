from collections import Counter
from datetime import datetime, timezone
from typing import Dict, Optional
import hashlib
import re

from pydantic import BaseModel, ConfigDict


# str.split() also breaks on U+001C..U+001F, which are not White_Space
WHITESPACE = re.compile(r"[^\S\x1c-\x1f]+")


class AnalysisRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    content_hash: str
    text: str
    length: int
    is_palindrome: bool
    unique_character_count: int
    word_count: int
    character_frequency: Dict[str, int]
    created_at: str


def content_hash(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def format_timestamp(moment: datetime) -> str:
    # RFC 3339, UTC, millisecond precision
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def analyze(text: str, now: Optional[datetime] = None) -> AnalysisRecord:
    """
    Compute every property of `text`.
    Works code point by code point: palindrome check is case and whitespace
    sensitive and the empty string is a valid input.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    freq = Counter(text)
    return AnalysisRecord(
        content_hash=content_hash(text),
        text=text,
        length=len(text),
        is_palindrome=text == text[::-1],
        unique_character_count=len(freq),
        word_count=len([w for w in WHITESPACE.split(text) if w]),
        character_frequency=dict(freq),
        created_at=format_timestamp(now),
    )
