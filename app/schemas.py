from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from app.analysis import AnalysisRecord


class CreateStringRequest(BaseModel):
    value: Any = Field(None, description="string to analyze")


class StringProperties(BaseModel):
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringResponse(BaseModel):
    id: str
    value: str
    properties: StringProperties
    created_at: str

    @classmethod
    def from_record(cls, record: AnalysisRecord) -> "StringResponse":
        return cls(
            id=record.content_hash,
            value=record.text,
            properties=StringProperties(
                length=record.length,
                is_palindrome=record.is_palindrome,
                unique_characters=record.unique_character_count,
                word_count=record.word_count,
                sha256_hash=record.content_hash,
                character_frequency_map=record.character_frequency,
            ),
            created_at=record.created_at,
        )


class StringListResponse(BaseModel):
    data: List[StringResponse]
    count: int
    filters_applied: Dict[str, Any]


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[StringResponse]
    count: int
    interpreted_query: InterpretedQuery


def to_responses(records: List[AnalysisRecord]) -> List[StringResponse]:
    return [StringResponse.from_record(r) for r in records]
