from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Annotated, Any, Dict, Optional, List
from datetime import datetime, timezone

from string_analyzer.config import MAX_VALUE_LENGTH


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class StringCreate(BaseModel):
    value: str = Field(..., strict=True, description="String to analyze")

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        trimmed = v.strip()
        if not trimmed:
            raise ValueError("String value cannot be empty or only whitespace")
        if len(trimmed) > MAX_VALUE_LENGTH:
            raise ValueError(f"String value too long (max {MAX_VALUE_LENGTH} characters)")
        return v


class StringProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency: Dict[str, int]


class AnalyzedString(BaseModel):
    """Result of analyzing one canonical string, before it is stored."""
    model_config = ConfigDict(frozen=True)

    value: str
    properties: StringProperties

    @property
    def content_hash(self) -> str:
        return self.properties.sha256_hash


class StringResponse(BaseModel):
    id: str
    value: str
    properties: StringProperties
    created_at: UtcDatetime

    @classmethod
    def from_record(cls, record) -> "StringResponse":
        return cls(
            id=record.id,
            value=record.value,
            properties=StringProperties(
                length=record.length,
                is_palindrome=record.is_palindrome,
                unique_characters=record.unique_characters,
                word_count=record.word_count,
                sha256_hash=record.id,
                character_frequency=record.character_frequency,
            ),
            created_at=record.created_at,
        )


class StringFilters(BaseModel):
    """
    Typed filter set shared by structured and natural language queries.
    Absent fields put no constraint on that dimension; present ones are ANDed.
    """
    model_config = ConfigDict(extra="forbid")

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = Field(None, ge=0)
    max_length: Optional[int] = Field(None, ge=0)
    word_count: Optional[int] = Field(None, ge=0)
    contains_character: Optional[str] = Field(None, min_length=1, max_length=1)

    @field_validator("contains_character")
    @classmethod
    def fold_character(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        folded = v.lower()
        # Some characters lowercase to more than one (e.g. "İ" -> "i̇")
        if len(folded) != 1:
            raise ValueError("contains_character must be a single character after lowercasing")
        return folded

    @model_validator(mode="after")
    def check_length_bounds(self) -> "StringFilters":
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise ValueError("min_length cannot be greater than max_length")
        return self

    def applied(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class StringListResponse(BaseModel):
    data: List[StringResponse]
    count: int
    filters_applied: Dict[str, Any] = {}


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, str]


class NaturalLanguageResponse(StringListResponse):
    interpreted_query: InterpretedQuery


class PatternSearchResponse(BaseModel):
    data: List[StringResponse]
    count: int
    pattern: str


class StringStatistics(BaseModel):
    total_strings: int
    average_length: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    palindrome_count: int
    average_word_count: Optional[float] = None
    last_created_at: Optional[UtcDatetime] = None


class StatisticsResponse(BaseModel):
    statistics: StringStatistics
    generated_at: datetime
