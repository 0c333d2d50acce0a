from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from datetime import datetime, timezone
from typing import Optional
import logging
import pydantic

from string_analyzer.config import MAX_QUERY_LENGTH, MAX_VALUE_LENGTH
from string_analyzer.database import get_db
from string_analyzer.crud import string_record as crud
from string_analyzer.errors import (
    ConflictError,
    ConflictingFiltersError,
    NotFoundError,
    ValidationError,
)
from string_analyzer.schemas.string_record import (
    InterpretedQuery,
    NaturalLanguageResponse,
    PatternSearchResponse,
    StatisticsResponse,
    StringCreate,
    StringFilters,
    StringListResponse,
    StringResponse,
    StringStatistics,
)
from string_analyzer.services.analyzer import analyze
from string_analyzer.services.query_parser import translate

router = APIRouter()
logger = logging.getLogger(__name__)


def _first_error(exc: pydantic.ValidationError) -> str:
    message = exc.errors()[0]["msg"]
    return message.removeprefix("Value error, ")


@router.post("/strings", response_model=StringResponse, status_code=status.HTTP_201_CREATED)
def create_string(string_data: StringCreate, db: Session = Depends(get_db)):
    """
    Analyze and store a string.
    Returns 409 if the (trimmed) string already exists.
    """
    analysis = analyze(string_data.value)

    if crud.exists(db, analysis.value):
        raise ConflictError("String already exists in the system")

    record = crud.insert(db, analysis)
    return StringResponse.from_record(record)


@router.get("/strings", response_model=StringListResponse)
def get_all_strings(
    is_palindrome: Optional[bool] = Query(None, description="Filter by palindrome (true/false)"),
    min_length: Optional[int] = Query(None, ge=0, description="Minimum string length"),
    max_length: Optional[int] = Query(None, ge=0, description="Maximum string length"),
    word_count: Optional[int] = Query(None, ge=0, description="Exact word count"),
    contains_character: Optional[str] = Query(
        None, min_length=1, max_length=1, description="Single character the string must contain"
    ),
    db: Session = Depends(get_db),
):
    """
    Get all strings with optional filtering, newest first.
    """
    try:
        filters = StringFilters(
            is_palindrome=is_palindrome,
            min_length=min_length,
            max_length=max_length,
            word_count=word_count,
            contains_character=contains_character,
        )
    except pydantic.ValidationError as e:
        raise ValidationError(_first_error(e)) from e

    strings = crud.find_by_filters(db, filters)
    data = [StringResponse.from_record(s) for s in strings]

    return StringListResponse(data=data, count=len(data), filters_applied=filters.applied())


@router.get("/strings/filter-by-natural-language", response_model=NaturalLanguageResponse)
def filter_by_natural_language(
    query: str = Query(..., min_length=1, max_length=MAX_QUERY_LENGTH, description="Natural language query"),
    db: Session = Depends(get_db),
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    if not query.strip():
        raise ValidationError("Query cannot be empty")

    parsed_filters = translate(query)
    if not parsed_filters:
        raise ValidationError("Unable to parse natural language query")

    try:
        filters = StringFilters(**parsed_filters)
    except pydantic.ValidationError as e:
        logger.info(f"Query {query!r} produced unusable filters {dict(parsed_filters)}: {_first_error(e)}")
        raise ConflictingFiltersError("Query parsed but resulted in conflicting filters") from e

    strings = crud.find_by_filters(db, filters)
    data = [StringResponse.from_record(s) for s in strings]

    return NaturalLanguageResponse(
        data=data,
        count=len(data),
        filters_applied=filters.applied(),
        interpreted_query=InterpretedQuery(original=query, parsed_filters=dict(parsed_filters)),
    )


@router.get("/strings/stats/statistics", response_model=StatisticsResponse)
def get_statistics(db: Session = Depends(get_db)):
    """
    Aggregate figures across all stored strings.
    """
    return StatisticsResponse(
        statistics=StringStatistics(**crud.aggregate_statistics(db)),
        generated_at=datetime.now(timezone.utc),
    )


@router.get("/strings/search/by-pattern", response_model=PatternSearchResponse)
def search_strings(
    pattern: str = Query(..., min_length=1, max_length=MAX_VALUE_LENGTH, description="Substring to look for"),
    db: Session = Depends(get_db),
):
    """
    Get all strings whose value contains the given substring.
    """
    strings = crud.search_by_pattern(db, pattern)
    data = [StringResponse.from_record(s) for s in strings]
    return PatternSearchResponse(data=data, count=len(data), pattern=pattern)


@router.get("/strings/{string_value}", response_model=StringResponse)
def get_string(string_value: str, db: Session = Depends(get_db)):
    """
    Get analysis for a specific string, by value or by content hash.
    Returns 404 if string doesn't exist.
    """
    record = crud.resolve(db, string_value)
    if not record:
        raise NotFoundError("String")
    return StringResponse.from_record(record)


@router.delete("/strings/{string_value}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(string_value: str, db: Session = Depends(get_db)):
    """
    Delete a string, by value or by content hash.
    Returns 404 if string doesn't exist.
    """
    record = crud.resolve(db, string_value)
    if record is None or not crud.delete_by_hash(db, record.id):
        raise NotFoundError("String")
    return None
